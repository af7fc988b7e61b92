"""Test fixtures for validator testing.

Provides sample documents:
- sample_openapi.yaml - OpenAPI 3.0 petstore with internal $refs
- sample_swagger.json - Swagger 2.0 document in JSON
- circular_openapi.yaml - OpenAPI 3.1 document with a self-referencing schema
"""

from __future__ import annotations

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent

MINIMAL_OPENAPI_YAML = "openapi: 3.0.0\ninfo:\n  title: Test\n  version: 1.0.0\npaths: {}"

INVALID_YAML = "not: valid: yaml: : :"

# Parses fine but 'info' is missing
MISSING_INFO_YAML = "openapi: 3.0.0\npaths: {}\n"

UNRESOLVED_REF_YAML = """\
openapi: 3.0.0
info:
  title: Broken
  version: 1.0.0
paths:
  /things:
    get:
      responses:
        '200':
          description: OK
          content:
            application/json:
              schema:
                $ref: '#/components/schemas/Missing'
"""


def fixture_path(name: str) -> Path:
    """Return the absolute path to a named fixture file."""
    path = FIXTURES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    return path


def load_openapi() -> str:
    """Load the sample OpenAPI document as a string."""
    return fixture_path("sample_openapi.yaml").read_text(encoding="utf-8")


def load_swagger() -> str:
    """Load the sample Swagger 2.0 document as a string."""
    return fixture_path("sample_swagger.json").read_text(encoding="utf-8")


def load_circular() -> str:
    """Load the self-referencing OpenAPI document as a string."""
    return fixture_path("circular_openapi.yaml").read_text(encoding="utf-8")
