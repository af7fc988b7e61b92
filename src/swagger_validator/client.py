"""HTTP client for the validation endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from src.shared.errors import ValidatorUnavailableError
from src.shared.models.validation import StructuredResponse

logger = logging.getLogger(__name__)


class ValidatorClient:
    """Submit document text to a running validator and parse its reply.

    Args:
        base_url: Root URL of the validator service.
        timeout: Seconds to wait for a reply.
        http_client: Pre-built ``httpx.Client`` (used instead of opening one).
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 60.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def __enter__(self) -> "ValidatorClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def validate(self, content: str) -> tuple[int, StructuredResponse]:
        """POST *content* to ``/validate``.

        Returns:
            The HTTP status code and the parsed response.

        Raises:
            ValidatorUnavailableError: when the service cannot be reached or
                does not answer with the expected response shape.
        """
        url = f"{self.base_url}/validate"
        try:
            resp = self._client.post(url, json={"content": content})
        except httpx.HTTPError as exc:
            logger.warning("Validator request to %s failed: %s", url, exc)
            raise ValidatorUnavailableError(
                f"Could not reach validator at {self.base_url}: {exc}"
            ) from exc

        try:
            return resp.status_code, StructuredResponse.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as exc:
            raise ValidatorUnavailableError(
                f"Unexpected reply from validator (HTTP {resp.status_code}): {exc}"
            ) from exc
