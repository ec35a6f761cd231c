"""
Error display for CLI commands.
"""

from arcsite.core.exceptions import ArcError
import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.padding import Padding

console = Console(stderr=True)

def handle_error(err: ArcError, debug: bool = False):
    """Prints an ArcError as a rich panel and exits with status 1."""
    console.print()
    details = Text(err.message)
    for label, value in err.context.location():
        details.append(f"\n{label}: ", style="bold")
        details.append(str(value))

    error_panel = Panel(
        details,
        title=f"[bold red]Error: {type(err).__name__}[/bold red]",
        subtitle=f"[dim]code {err.error_code.value}[/dim]",
        border_style="red",
        expand=False
    )
    console.print(error_panel)

    if err.suggestions:
        console.print("\n[bold green]Suggested solutions:[/bold green]")
        for i, suggestion in enumerate(err.suggestions, 1):
            suggestion_text = Text(f"{i}. {suggestion.action}: {suggestion.description}\n")
            if suggestion.command:
                suggestion_text.append("   Run: ", style="bold")
                suggestion_text.append(f"{suggestion.command}", style="cyan")
            console.print(Padding(suggestion_text, (0, 1)))

    if debug:
        console.print_json(data=err.get_debug_info())
    elif err.context.correlation_id:
        console.print(Padding(f"Trace ID: [yellow]{err.context.correlation_id}[/yellow]", (1, 0, 0, 0)))

    raise typer.Exit(code=1)
