"""Display rules for validation responses.

Everything here is presentation only: it reads a :class:`StructuredResponse`
and never changes it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.shared.models.validation import ErrorLocation, StructuredResponse

_LOCATION_RE = re.compile(r"line (\d+), column (\d+)")


def extract_error_location(error: str | None) -> ErrorLocation | None:
    """Pull the first ``line N, column M`` locator out of *error*, if any."""
    if not error:
        return None
    match = _LOCATION_RE.search(error)
    if match is None:
        return None
    return ErrorLocation(line=match.group(1), column=match.group(2))


@dataclass
class ResponseView:
    """What a surface should show for one response."""
    valid: bool
    message: str
    fields: list[tuple[str, str]] = field(default_factory=list)
    location: ErrorLocation | None = None
    error: str | None = None


def build_view(response: StructuredResponse) -> ResponseView:
    """Turn a response into display fields.

    Success shows the API version, title and version string only; the path map
    is not rendered.  Failure shows a location above the raw diagnostic when
    one can be extracted.
    """
    if response.api is not None:
        api = response.api
        version_label = "Swagger" if api.swagger and not api.openapi else "OpenAPI"
        return ResponseView(
            valid=True,
            message=response.message,
            fields=[
                (version_label, api.spec_version),
                ("Title", api.info.title),
                ("Version", api.info.version),
            ],
        )

    return ResponseView(
        valid=False,
        message=response.message,
        location=extract_error_location(response.error),
        error=response.error,
    )
