"""Shared constants used across the validator service."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Port numbers
INTERNAL_PORT: int = 8000

# Service names
VALIDATOR_SERVICE_NAME: str = "swagger-validator"

# Response messages
VALID_MESSAGE: str = "API is valid"
INVALID_MESSAGE: str = "API validation failed"

# Staging strategies
STRATEGY_MEMORY: str = "memory"
STRATEGY_FILE: str = "file"
SUPPORTED_STRATEGIES: list[str] = [STRATEGY_MEMORY, STRATEGY_FILE]

# Staged artifact naming
STAGED_ARTIFACT_PREFIX: str = "swagger-validate-"
STAGED_ARTIFACT_SUFFIX: str = ".yaml"

# Base URL used for $ref resolution when the document never touches disk
IN_MEMORY_DOCUMENT_URL: str = "file:///__in_memory__/document.yaml"

# Supported document versions
SUPPORTED_SWAGGER_VERSIONS: list[str] = ["2.0"]
SUPPORTED_OPENAPI_PREFIXES: list[str] = ["3.0", "3.1"]

# Upper bound on nodes a document may expand to once YAML aliases are copied
MAX_EXPANDED_NODES: int = 1_000_000
