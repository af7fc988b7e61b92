"""Rich-based terminal rendering of validation responses.

Uses a module-level :class:`~rich.console.Console` singleton, like the rest
of the terminal output, so tests can swap it for a capturing console.
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.shared.models.validation import StructuredResponse
from src.swagger_validator.presentation import build_view

# ---------------------------------------------------------------------------
# Module-level Console singleton
# ---------------------------------------------------------------------------

_console = Console()


# ---------------------------------------------------------------------------
# Display functions
# ---------------------------------------------------------------------------


def print_validation_result(response: StructuredResponse) -> None:
    """Print a green summary panel or a red error panel for *response*."""
    view = build_view(response)

    if view.valid:
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Field", style="bold")
        table.add_column("Value", style="cyan")
        for label, value in view.fields:
            table.add_row(label, value)
        _console.print(
            Panel(
                table,
                title=f"[bold green]{view.message}[/bold green]",
                border_style="green",
                expand=False,
            )
        )
        return

    parts: list[Text] = []
    if view.location is not None:
        location = Text()
        location.append("Location: ", style="bold")
        location.append(
            f"line {view.location.line}, column {view.location.column}",
            style="yellow",
        )
        parts.append(location)
    parts.append(Text(view.error or "", style="bold white"))

    _console.print(
        Panel(
            Group(*parts),
            title=f"[bold red]{view.message}[/bold red]",
            border_style="red",
            expand=False,
        )
    )


def print_error_panel(error: str | Exception) -> None:
    """Print an error message in a red Rich panel.

    Parameters
    ----------
    error:
        Error message string or Exception instance.
    """
    error_text = str(error)
    _console.print(
        Panel(
            Text(error_text, style="bold white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
    )
