"""OpenAPI / Swagger document validator.

Validates Swagger 2.0 and OpenAPI 3.0.x / 3.1.x documents using
openapi-spec-validator for structural validation and prance for $ref
resolution.  On success the fully dereferenced document is returned; on
failure a :class:`DocumentValidationError` carries the first diagnostic.
"""
from __future__ import annotations

import logging
from typing import Any

from openapi_spec_validator import (  # type: ignore[import-untyped]
    OpenAPIV2SpecValidator,
    OpenAPIV30SpecValidator,
    OpenAPIV31SpecValidator,
)
from prance.util.resolver import (  # type: ignore[import-untyped]
    RESOLVE_FILES,
    RESOLVE_INTERNAL,
    RefResolver,
)
from prance.util.url import ResolutionError  # type: ignore[import-untyped]

from src.shared.constants import (
    SUPPORTED_OPENAPI_PREFIXES,
    SUPPORTED_SWAGGER_VERSIONS,
)
from src.shared.errors import DocumentValidationError

logger = logging.getLogger(__name__)


def validate_and_dereference(
    spec: Any,
    base_url: str,
    resolve_files: bool = False,
) -> dict[str, Any]:
    """Validate an API document and resolve its ``$ref`` pointers.

    Args:
        spec: The loaded document tree.
        base_url: URL the document is considered to live at.  Relative
            references are resolved against it.
        resolve_files: Also follow references into other files.  Only
            meaningful when the document was staged on disk.  Without it,
            any ``$ref`` that does not start with ``#`` is refused before
            the validator can follow it.

    Returns:
        The dereferenced document.

    Raises:
        DocumentValidationError: when any check fails.
    """
    # ------------------------------------------------------------------
    # 1. Basic structural pre-checks
    # ------------------------------------------------------------------
    if not isinstance(spec, dict):
        raise DocumentValidationError(
            "Document must be a mapping (object), got " + _type_name(spec)
        )

    if not spec:
        raise DocumentValidationError("Document is an empty object")

    if not resolve_files:
        _reject_external_refs(spec)

    # ------------------------------------------------------------------
    # 2. Version detection
    # ------------------------------------------------------------------
    validator_cls = _select_validator(spec)

    # ------------------------------------------------------------------
    # 3. Structural validation via openapi-spec-validator
    # ------------------------------------------------------------------
    _run_spec_validator(spec, validator_cls, base_url)

    # ------------------------------------------------------------------
    # 4. $ref resolution via prance
    # ------------------------------------------------------------------
    return _resolve_references(spec, base_url, resolve_files)


# ======================================================================
# Internal helpers
# ======================================================================


def _reject_external_refs(spec: dict[str, Any]) -> None:
    """Refuse references that point outside the document itself."""
    stack: list[Any] = [spec]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and not ref.startswith("#"):
                raise DocumentValidationError(
                    f"External references are not supported for in-memory documents: {ref}"
                )
            stack.extend(node.values())
        elif isinstance(node, list):
            stack.extend(node)


def _type_name(value: Any) -> str:
    if value is None:
        return "an empty document"
    return type(value).__name__


def _select_validator(spec: dict[str, Any]) -> type:
    """Pick the validator class from the ``openapi`` / ``swagger`` key."""
    if "swagger" in spec:
        version = spec["swagger"]
        if not isinstance(version, str):
            raise DocumentValidationError(
                f"'swagger' key must be a string, got {type(version).__name__}"
            )
        if version.strip() not in SUPPORTED_SWAGGER_VERSIONS:
            raise DocumentValidationError(
                f"Unsupported Swagger version '{version}'. Only 2.0 is supported."
            )
        return OpenAPIV2SpecValidator

    version_raw = spec.get("openapi")
    if version_raw is None:
        raise DocumentValidationError(
            "Missing required 'openapi' or 'swagger' key in document"
        )
    if not isinstance(version_raw, str):
        raise DocumentValidationError(
            f"'openapi' key must be a string, got {type(version_raw).__name__}"
        )

    version = version_raw.strip()
    if version.startswith("3.1"):
        return OpenAPIV31SpecValidator
    if version.startswith("3.0"):
        return OpenAPIV30SpecValidator
    raise DocumentValidationError(
        f"Unsupported OpenAPI version '{version}'. Only "
        + ", ".join(f"{p}.x" for p in SUPPORTED_OPENAPI_PREFIXES)
        + " are supported."
    )


def _run_spec_validator(
    spec: dict[str, Any],
    validator_cls: type,
    base_url: str,
) -> None:
    """Run openapi-spec-validator and raise on the first reported error."""
    validator = validator_cls(spec, base_uri=base_url)
    try:
        for error in validator.iter_errors():
            # error.absolute_path holds the JSON-pointer segments to the node
            path_str = " -> ".join(str(p) for p in error.absolute_path)
            if path_str:
                raise DocumentValidationError(f"{error.message} (at {path_str})")
            raise DocumentValidationError(str(error.message))
    except DocumentValidationError:
        raise
    # Unresolvable references surface from the validator's own resolver
    except Exception as exc:
        logger.debug("Spec validator raised %s", type(exc).__name__)
        raise DocumentValidationError(f"Could not validate document: {exc}") from exc


def _keep_circular_ref(limit: int, parsed_url: Any, recursions: Any = ()) -> dict[str, str]:
    """Leave a circular reference in place instead of failing."""
    return {"$ref": "#" + parsed_url.fragment}


def _resolve_references(
    spec: dict[str, Any],
    base_url: str,
    resolve_files: bool,
) -> dict[str, Any]:
    """Return a copy of *spec* with every ``$ref`` replaced by its target."""
    resolve_types = RESOLVE_INTERNAL | RESOLVE_FILES if resolve_files else RESOLVE_INTERNAL
    resolver = RefResolver(
        spec,
        base_url,
        resolve_types=resolve_types,
        recursion_limit_handler=_keep_circular_ref,
    )
    try:
        resolver.resolve_references()
    # prance reports a missing target inside a document as a lookup error
    except (ResolutionError, KeyError, IndexError, TypeError) as exc:
        raise DocumentValidationError(f"Error resolving $ref pointer: {exc}") from exc
    return resolver.specs
