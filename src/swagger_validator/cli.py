"""Command-line entry point for the swagger validator.

``serve`` runs the HTTP service; ``validate`` submits a document to it (or
checks it in-process with ``--local``) and renders the verdict.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from src.shared.config import ClientConfig, ValidatorConfig
from src.shared.errors import ValidatorUnavailableError
from src.shared.models.validation import StructuredResponse
from src.swagger_validator.client import ValidatorClient
from src.swagger_validator.display import print_error_panel, print_validation_result
from src.swagger_validator.services.submission import check_document, to_response

app = typer.Typer(
    name="swagger-validator",
    help="Validate OpenAPI / Swagger documents.",
    no_args_is_help=True,
)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_UNAVAILABLE = 2


def _read_document(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {source}", param_hint="DOCUMENT")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise typer.BadParameter(f"File is not valid UTF-8: {source}", param_hint="DOCUMENT")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Interface to bind (default: HOST)."),
    port: Optional[int] = typer.Option(None, help="Port to bind (default: PORT)."),
) -> None:
    """Run the validation service."""
    import uvicorn

    from src.swagger_validator.main import create_app

    config = ValidatorConfig()
    uvicorn.run(
        create_app(config),
        host=host or config.host,
        port=port or config.port,
        log_config=None,
    )


@app.command()
def validate(
    document: str = typer.Argument(..., help="Path to a YAML/JSON document, or '-' for stdin."),
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Validator URL (default: VALIDATOR_URL)."
    ),
    local: bool = typer.Option(
        False, "--local", help="Validate in-process instead of calling a server."
    ),
) -> None:
    """Submit a document for validation and print the verdict."""
    content = _read_document(document)

    if local:
        config = ValidatorConfig()
        outcome = check_document(
            content,
            strategy=config.staging_strategy,
            temp_dir=config.temp_dir,
            encoding=config.document_encoding,
        )
        response, _ = to_response(outcome)
        print_validation_result(response)
        raise typer.Exit(code=_exit_code(response))

    client_config = ClientConfig()
    base_url = server or client_config.validator_url
    try:
        with ValidatorClient(base_url, timeout=client_config.request_timeout_seconds) as client:
            _, response = client.validate(content)
    except ValidatorUnavailableError as exc:
        print_error_panel(exc.detail)
        raise typer.Exit(code=EXIT_UNAVAILABLE)

    print_validation_result(response)
    raise typer.Exit(code=_exit_code(response))


def _exit_code(response: StructuredResponse) -> int:
    return EXIT_VALID if response.is_valid else EXIT_INVALID


if __name__ == "__main__":
    app()
