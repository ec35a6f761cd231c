"""
CLI Utilities

Shared helpers for CLI commands: logging setup, configuration loading and
formatted output.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel

from arcsite.core.config import AppConfig, ConfigManager

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def load_config_from_cli(
    config_file: Optional[str],
    cli_args: Dict[str, Any]
) -> Tuple[AppConfig, ConfigManager]:
    """
    Load configuration with CLI arguments taking precedence.
    
    Returns:
        Tuple of the loaded configuration and the manager that loaded it
    """
    manager = ConfigManager(config_file)
    config = manager.load_config(cli_args=cli_args)
    return config, manager


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header for CLI output."""
    if subtitle:
        header_text = f"[bold cyan]{title}[/bold cyan]\n[dim]{subtitle}[/dim]"
    else:
        header_text = f"[bold cyan]{title}[/bold cyan]"
    
    console.print(Panel(header_text, border_style="cyan"))


def print_config_summary(config: AppConfig) -> None:
    """Print a summary of the effective configuration."""
    summary = config.summary()
    config_lines = [
        f"Source: [cyan]{summary['app_dir']}[/cyan]",
        f"Output: [cyan]{summary['site_dir']}[/cyan]",
        f"Site: [cyan]{summary['site_title']}[/cyan] ([dim]{summary['site_url']}[/dim])",
    ]
    if not summary['generate_rss']:
        config_lines.append("RSS feed: [yellow]Disabled[/yellow]")
    
    console.print(Panel(
        "\n".join(config_lines),
        title="[bold]Configuration[/bold]",
        border_style="green"
    ))


def print_warnings(warnings: List[str]) -> None:
    """Print configuration warnings."""
    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    console.print("\n[yellow]Operation cancelled by user[/yellow]")
    raise typer.Exit(1)
