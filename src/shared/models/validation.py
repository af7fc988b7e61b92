"""Validation request/response Pydantic v2 data models and outcome types."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, Field, model_validator

from src.shared.constants import INVALID_MESSAGE, VALID_MESSAGE


class ValidateRequest(BaseModel):
    """Request envelope for POST /validate."""
    content: str = Field(..., description="Raw API definition text, YAML or JSON")

    model_config = {"extra": "ignore"}


class ApiInfo(BaseModel):
    """The ``info`` object of a validated document."""
    title: str
    version: str

    model_config = {"extra": "allow"}


class ApiDocument(BaseModel):
    """Summary of a validated, dereferenced API document.

    Extra keys are kept so the whole dereferenced document is returned to the
    caller as-is.
    """
    openapi: str | None = None
    swagger: str | None = None
    info: ApiInfo
    paths: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "allow"}

    @property
    def spec_version(self) -> str:
        """The OpenAPI or Swagger version identifier."""
        return self.openapi or self.swagger or ""


class StructuredResponse(BaseModel):
    """Wire-level response of the validation endpoint."""
    message: str
    api: ApiDocument | None = None
    error: str | None = None

    @model_validator(mode="after")
    def exactly_one_of_api_or_error(self) -> "StructuredResponse":
        if (self.api is None) == (self.error is None):
            raise ValueError("exactly one of 'api' or 'error' must be set")
        return self

    @property
    def is_valid(self) -> bool:
        return self.api is not None

    def to_payload(self) -> dict[str, Any]:
        """Serialise for the wire, omitting whichever of api/error is unset."""
        payload: dict[str, Any] = {"message": self.message}
        if self.api is not None:
            unset_versions = {
                name for name in ("openapi", "swagger") if getattr(self.api, name) is None
            }
            payload["api"] = self.api.model_dump(mode="json", exclude=unset_versions)
        else:
            payload["error"] = self.error
        return payload

    @classmethod
    def success(cls, document: dict[str, Any]) -> "StructuredResponse":
        return cls(message=VALID_MESSAGE, api=ApiDocument.model_validate(document))

    @classmethod
    def failure(cls, error: str) -> "StructuredResponse":
        return cls(message=INVALID_MESSAGE, error=error)


class ErrorLocation(BaseModel):
    """A ``line N, column M`` locator pulled out of a diagnostic string."""
    line: str
    column: str


# ---------------------------------------------------------------------------
# Validation outcome (tagged result returned by the submission handler core)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Valid:
    """The validator accepted the document."""
    document: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Invalid:
    """The document, its envelope, or its staging was rejected."""
    error: str
    kind: str = "validation"


ValidationOutcome = Union[Valid, Invalid]
