#!/usr/bin/env python3
"""
arcsite CLI Main Application

Typer-based command-line interface for building and watching a site.
"""

import sys
from typing import Optional

import typer
from rich.console import Console

from arcsite.cli import __version__
from arcsite.cli.commands import build, watch

console = Console()

app = typer.Typer(
    name="arcsite",
    help="Static site generator for Markdown content and directive templates",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("build", help="Generate the site once")(build.build_site)
app.command("watch", help="Rebuild the site whenever a source file changes")(watch.watch_site)


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]arcsite[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    arcsite - Markdown + templates -> static site

    [bold]Layout:[/bold] app/posts, app/pages, app/templates, app/assets, app/site.config

    • Build once: [cyan]arcsite build[/cyan]
    • Rebuild on change: [cyan]arcsite watch[/cyan]
    """


def main():
    """Entry point for the arcsite console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
