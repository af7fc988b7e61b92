"""Health check endpoint for the validator service."""
from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Request

from src.shared.models.common import HealthStatus
from src.shared.constants import STRATEGY_FILE, VERSION, VALIDATOR_SERVICE_NAME
from src.swagger_validator.services.staging import list_artifacts, resolve_temp_dir

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health(request: Request) -> HealthStatus:
    """Health check endpoint."""
    config = request.app.state.config

    def _check() -> HealthStatus:
        status = "healthy"
        details: dict[str, object] = {}
        if config.staging_strategy == STRATEGY_FILE:
            temp_dir = resolve_temp_dir(config.temp_dir)
            details["temp_dir"] = str(temp_dir)
            try:
                details["staged_artifacts"] = len(list_artifacts(config.temp_dir))
            except OSError as exc:
                details["temp_dir_error"] = str(exc)
                status = "degraded"

        start_time = getattr(request.app.state, "start_time", time.time())

        return HealthStatus(
            status=status,
            service_name=VALIDATOR_SERVICE_NAME,
            version=VERSION,
            strategy=config.staging_strategy,
            uptime_seconds=time.time() - start_time,
            details=details,
        )

    return await asyncio.to_thread(_check)
