"""Custom exception classes and FastAPI exception handlers."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

from src.shared.constants import INVALID_MESSAGE


class AppError(Exception):
    """Base application error."""

    kind: str = "internal"

    def __init__(self, detail: str, status_code: int = 500) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class PayloadError(AppError):
    """Request envelope is not valid JSON or lacks the content field (400)."""

    kind = "payload"

    def __init__(self, detail: str = "Invalid request payload") -> None:
        super().__init__(detail=detail, status_code=400)


class DocumentSyntaxError(AppError):
    """Document text could not be parsed as YAML or JSON (400)."""

    kind = "syntax"

    def __init__(self, detail: str = "Document syntax error") -> None:
        super().__init__(detail=detail, status_code=400)


class DocumentValidationError(AppError):
    """Document parsed but was rejected by the validator (400)."""

    kind = "validation"

    def __init__(self, detail: str = "Document validation error") -> None:
        super().__init__(detail=detail, status_code=400)


class ArtifactIOError(AppError):
    """Staging a document on disk failed (400)."""

    kind = "artifact_io"

    def __init__(self, detail: str = "Could not stage document") -> None:
        super().__init__(detail=detail, status_code=400)


class ValidationTimeoutError(AppError):
    """Validator did not finish within the configured bound (400)."""

    kind = "timeout"

    def __init__(self, detail: str = "Validation timed out") -> None:
        super().__init__(detail=detail, status_code=400)


class ValidatorUnavailableError(AppError):
    """The validation server could not be reached (503)."""

    kind = "unavailable"

    def __init__(self, detail: str = "Validator unavailable") -> None:
        super().__init__(detail=detail, status_code=503)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with a FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": INVALID_MESSAGE, "error": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": INVALID_MESSAGE, "error": str(exc)},
        )
