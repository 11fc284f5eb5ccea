"""HTTP service registering builds and approving their manual steps."""
