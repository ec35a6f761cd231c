"""
Watch Command

Builds the site, then rebuilds it whenever content, templates or assets
change.
"""

from typing import Annotated, Optional

import typer

from arcsite.builder import SiteBuilder
from arcsite.cli.error_handling import handle_error
from arcsite.cli.utils import (
    console,
    handle_keyboard_interrupt,
    load_config_from_cli,
    print_header,
    print_warnings,
    setup_logging,
)
from arcsite.core.exceptions import ArcError
from arcsite.tools.hot_reload import RebuildEvent, SiteWatcher


def watch_site(
    app_dir: Annotated[Optional[str], typer.Option("--app-dir", "-a", help="Source directory to watch")] = None,
    site_dir: Annotated[Optional[str], typer.Option("--site-dir", "-o", help="Output directory for the generated site")] = None,
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
    debounce: Annotated[Optional[float], typer.Option("--debounce", help="Seconds to wait after the last change before rebuilding")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Show full error details")] = None,
):
    """
    Watch the source directory and rebuild on every change.
    """
    cli_args = {
        'app_dir': app_dir,
        'site_dir': site_dir,
        'debounce': debounce,
        'verbose': verbose,
        'debug': debug,
    }

    try:
        app_config, manager = load_config_from_cli(config, cli_args)
    except ArcError as e:
        handle_error(e, debug=bool(debug))
        return

    setup_logging(app_config.verbose or app_config.debug)
    print_warnings(manager.validate_config(app_config))

    def regenerate():
        # Fresh configuration per rebuild, site.config included.
        fresh_config, fresh_manager = load_config_from_cli(config, cli_args)
        SiteBuilder(fresh_config, site_config_found=fresh_manager.site_config_found).generate()

    def report(event: RebuildEvent):
        if event.success:
            console.print(f"[green]Rebuilt in {event.duration:.2f}s[/green]")
        else:
            console.print(f"[red]Rebuild failed:[/red] {event.error}")

    watcher = SiteWatcher(
        app_config.build.app_dir,
        regenerate,
        extensions=app_config.watch.extensions,
        ignored_dirs=[app_config.build.site_dir.name],
        poll_interval=app_config.watch.poll_interval,
        debounce=app_config.watch.debounce,
    )
    watcher.add_rebuild_callback(report)

    print_header("Arc Hot Reload Started", f"Watching: {app_config.build.app_dir}")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        watcher.watch()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        watcher.stop()
        handle_keyboard_interrupt()
