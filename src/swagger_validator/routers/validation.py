"""Validation endpoint for submitted API documents."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.shared.errors import PayloadError
from src.shared.models.validation import Invalid
from src.swagger_validator.services.submission import (
    parse_payload,
    submit_document,
    to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["validation"])


@router.post(
    "/validate",
    responses={
        200: {"description": "The document is a valid OpenAPI/Swagger definition"},
        400: {"description": "The payload or the document was rejected"},
    },
)
async def validate_document(request: Request) -> JSONResponse:
    """Validate the API definition in ``{"content": "..."}``.

    The body is read here rather than bound to a model so that envelope
    problems come back in the same failure shape as document problems.
    """
    try:
        text = parse_payload(await request.body())
    except PayloadError as exc:
        logger.info("Payload rejected: %s", exc.detail, extra={"kind": exc.kind})
        outcome = Invalid(error=exc.detail, kind=exc.kind)
    else:
        outcome = await submit_document(text, request.app.state.config)

    response, status_code = to_response(outcome)
    return JSONResponse(status_code=status_code, content=response.to_payload())
