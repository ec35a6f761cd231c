"""
Build Command

Generates the static site once.
"""

from typing import Annotated, Optional

import typer

from arcsite.builder import SiteBuilder
from arcsite.cli.error_handling import handle_error
from arcsite.cli.utils import (
    console,
    load_config_from_cli,
    print_config_summary,
    print_header,
    print_warnings,
    setup_logging,
)
from arcsite.core.exceptions import ArcError


def build_site(
    app_dir: Annotated[Optional[str], typer.Option("--app-dir", "-a", help="Source directory with posts, pages, templates and assets")] = None,
    site_dir: Annotated[Optional[str], typer.Option("--site-dir", "-o", help="Output directory for the generated site")] = None,
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
    rss: Annotated[Optional[bool], typer.Option("--rss/--no-rss", help="Generate feed.xml for posts")] = None,
    max_include_depth: Annotated[Optional[int], typer.Option("--max-include-depth", help="Deepest include nesting allowed")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Show full error details")] = None,
):
    """
    Generate the site from Markdown content and templates.
    """
    cli_args = {
        'app_dir': app_dir,
        'site_dir': site_dir,
        'rss': rss,
        'max_include_depth': max_include_depth,
        'verbose': verbose,
        'debug': debug,
    }

    try:
        app_config, manager = load_config_from_cli(config, cli_args)
        setup_logging(app_config.verbose or app_config.debug)

        print_header("Arc Site Build", f"{app_config.build.app_dir} -> {app_config.build.site_dir}")
        print_config_summary(app_config)
        print_warnings(manager.validate_config(app_config))

        builder = SiteBuilder(app_config, site_config_found=manager.site_config_found)
        result = builder.generate()
    except ArcError as e:
        handle_error(e, debug=bool(debug))
        return

    console.print(
        f"[green]Generated {result.document_count} documents[/green] "
        f"([cyan]{len(result.posts)}[/cyan] posts, "
        f"[cyan]{result.assets_copied}[/cyan] assets) in {result.duration:.2f}s"
    )
    if result.feed_path:
        console.print(f"RSS feed: [cyan]{result.feed_path}[/cyan]")
