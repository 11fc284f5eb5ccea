"""Approval service FastAPI application."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.quality_gate.config import load_quality_line_config
from src.quality_gate.registry import StepRegistry, default_registry
from src.quality_gate.run import RunRegistry
from src.shared.config import ApprovalServiceConfig
from src.shared.constants import APPROVAL_SERVICE_NAME, VERSION
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging


def create_app(
    config: ApprovalServiceConfig | None = None,
    step_registry: StepRegistry | None = None,
) -> FastAPI:
    """Create the approval service application."""
    config = config or ApprovalServiceConfig()
    logger = setup_logging(APPROVAL_SERVICE_NAME, config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - load the quality line and reset runs."""
        app.state.start_time = time.time()
        app.state.quality_line_config = load_quality_line_config(
            config.quality_line_config
        )
        app.state.step_registry = step_registry or default_registry()
        app.state.runs = RunRegistry()

        logger.info(
            "Service started: name=%s version=%s quality_line=%s gates=%d",
            APPROVAL_SERVICE_NAME,
            VERSION,
            app.state.quality_line_config.name,
            len(app.state.quality_line_config.gates),
        )
        yield
        logger.info("Service stopped: name=%s", APPROVAL_SERVICE_NAME)

    app = FastAPI(
        title="Quality Gate Approval",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(TraceIDMiddleware)
    register_exception_handlers(app)

    from src.approval_api.routers.builds import router as builds_router
    from src.approval_api.routers.health import router as health_router

    app.include_router(health_router)
    app.include_router(builds_router)
    return app


app = create_app()
