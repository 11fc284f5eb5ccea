"""Quality gates for finished builds.

Evaluates an ordered line of gates, each an ordered group of steps,
against a completed build; parses maven console logs for dependency
problems; holds the line on manual steps until they are approved.
"""

__version__ = "1.0.0"
