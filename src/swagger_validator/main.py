"""Swagger validator FastAPI application."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.shared.config import ValidatorConfig
from src.shared.constants import VERSION, VALIDATOR_SERVICE_NAME
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(config: ValidatorConfig | None = None) -> FastAPI:
    """Build the application around *config* (read from the environment by default)."""
    config = config or ValidatorConfig()
    logger = setup_logging(VALIDATOR_SERVICE_NAME, config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - record start time and log configuration."""
        app.state.start_time = time.time()
        logger.info(
            "Service started: name=%s version=%s strategy=%s timeout=%ss",
            VALIDATOR_SERVICE_NAME, VERSION, config.staging_strategy,
            config.validation_timeout_seconds,
        )
        yield
        logger.info("Service stopped: name=%s", VALIDATOR_SERVICE_NAME)

    app = FastAPI(
        title="Swagger Validator",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.start_time = time.time()

    app.add_middleware(TraceIDMiddleware)
    register_exception_handlers(app)

    # Register all routers
    from src.swagger_validator.routers.health import router as health_router
    from src.swagger_validator.routers.validation import router as validation_router

    app.include_router(health_router)
    app.include_router(validation_router)

    # Mounted last so API routes take precedence over the editor page
    if STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="editor")

    return app


app = create_app()
