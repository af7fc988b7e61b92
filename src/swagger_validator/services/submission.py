"""Submission handler: payload in, validation outcome out.

The core (:func:`check_document`) is a pure function of the document text
and the external validator.  It never raises; every failure becomes an
:class:`Invalid` outcome.  :func:`submit_document` runs the core off the
event loop with a bounded wait and, under the file strategy, owns the staged
artifact so it is gone before the request returns.
"""
from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.shared.config import ValidatorConfig
from src.shared.constants import IN_MEMORY_DOCUMENT_URL, STRATEGY_FILE
from src.shared.errors import AppError, PayloadError
from src.shared.models.validation import (
    ApiDocument,
    Invalid,
    StructuredResponse,
    Valid,
    ValidateRequest,
    ValidationOutcome,
)
from src.swagger_validator.services.document_loader import (
    load_document,
    load_document_file,
)
from src.swagger_validator.services.openapi_validator import validate_and_dereference
from src.swagger_validator.services.staging import (
    async_staged_artifact,
    staged_artifact,
)

logger = logging.getLogger(__name__)


def parse_payload(raw: bytes | str) -> str:
    """Return the ``content`` field of a JSON request envelope.

    Raises:
        PayloadError: for invalid JSON, a non-object body, or a missing or
            non-string ``content`` field.
    """
    if not raw:
        raise PayloadError("Request body is empty; expected {\"content\": \"...\"}")
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PayloadError(f"Request body is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError("Request body must be a JSON object with a 'content' field")
    try:
        return ValidateRequest.model_validate(data).content
    except PydanticValidationError as exc:
        if "content" not in data:
            raise PayloadError("Missing required field 'content'") from exc
        raise PayloadError("Field 'content' must be a string") from exc


def _validate_in_memory(text: str) -> dict[str, Any]:
    document = load_document(text)
    return validate_and_dereference(document, IN_MEMORY_DOCUMENT_URL)


def _validate_staged(path: Path, encoding: str) -> dict[str, Any]:
    document = load_document_file(path, encoding)
    return validate_and_dereference(document, path.resolve().as_uri(), resolve_files=True)


def _summarise(document: dict[str, Any]) -> ValidationOutcome:
    # The summary must parse so the response shape is guaranteed downstream
    ApiDocument.model_validate(document)
    return Valid(document=document)


def _run_guarded(fn: Any, *args: Any) -> ValidationOutcome:
    try:
        return _summarise(fn(*args))
    except AppError as exc:
        return Invalid(error=exc.detail, kind=exc.kind)
    except PydanticValidationError as exc:
        return Invalid(error=f"Validated document has an unexpected shape: {exc}", kind="validation")
    # Boundary of the handler core: nothing may escape
    except Exception as exc:
        logger.exception("Unexpected error while validating document")
        return Invalid(error=str(exc) or type(exc).__name__, kind="internal")


def check_document(
    text: str,
    *,
    strategy: str = "memory",
    temp_dir: str | None = None,
    encoding: str = "utf-8",
) -> ValidationOutcome:
    """Validate *text* and return a tagged outcome.  Never raises.

    Args:
        text: Raw API definition, YAML or JSON.
        strategy: ``"memory"`` parses the text and validates the structure
            directly; ``"file"`` stages the text on disk first.
        temp_dir: Directory for staged artifacts (file strategy only).
        encoding: Text encoding used to write and read staged artifacts.
    """
    if strategy != STRATEGY_FILE:
        return _run_guarded(_validate_in_memory, text)

    try:
        with staged_artifact(text, temp_dir, encoding) as path:
            return _run_guarded(_validate_staged, path, encoding)
    except AppError as exc:
        return Invalid(error=exc.detail, kind=exc.kind)


async def submit_document(text: str, config: ValidatorConfig) -> ValidationOutcome:
    """Run :func:`check_document` for one request with a bounded wait."""
    started = time.perf_counter()
    timeout = config.validation_timeout_seconds

    try:
        if config.staging_strategy == STRATEGY_FILE:
            async with async_staged_artifact(
                text, config.temp_dir, config.document_encoding
            ) as path:
                outcome = await asyncio.wait_for(
                    asyncio.to_thread(
                        _run_guarded, _validate_staged, path, config.document_encoding
                    ),
                    timeout=timeout,
                )
        else:
            outcome = await asyncio.wait_for(
                asyncio.to_thread(_run_guarded, _validate_in_memory, text),
                timeout=timeout,
            )
    except asyncio.TimeoutError:
        outcome = Invalid(
            error=f"Validation timed out after {timeout:g} seconds", kind="timeout"
        )
    except AppError as exc:
        outcome = Invalid(error=exc.detail, kind=exc.kind)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    if isinstance(outcome, Valid):
        logger.info(
            "Document is valid",
            extra={"strategy": config.staging_strategy, "elapsed_ms": elapsed_ms},
        )
    else:
        logger.info(
            "Document rejected: %s", outcome.error,
            extra={
                "kind": outcome.kind,
                "strategy": config.staging_strategy,
                "elapsed_ms": elapsed_ms,
            },
        )
    return outcome


def to_response(outcome: ValidationOutcome) -> tuple[StructuredResponse, int]:
    """Map an outcome to the wire response and its HTTP status."""
    if isinstance(outcome, Valid):
        return StructuredResponse.success(outcome.document), 200
    return StructuredResponse.failure(outcome.error), 400
