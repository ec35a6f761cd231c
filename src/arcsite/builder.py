"""
Site Builder

Orchestrates one complete generation run: output directory, assets,
content pages and the RSS feed. Every run starts from a fresh template
engine, so nothing from a previous build is carried over.
"""

import time
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from arcsite.content import FileProcessor, FrontmatterParser, MarkdownRenderer, PageProcessor
from arcsite.core.config.models import AppConfig
from arcsite.core.templates import FileTemplateStore, TemplateEngine
from arcsite.exporters import RssFeedExporter


TEMPLATES_DIR = "templates"


@dataclass
class BuildResult:
    """Summary of a generation run."""

    written: List[Path] = field(default_factory=list)
    posts: List[Dict[str, str]] = field(default_factory=list)
    assets_copied: int = 0
    feed_path: Optional[Path] = None
    duration: float = 0.0

    @property
    def document_count(self) -> int:
        return len(self.written)


class SiteBuilder:
    """
    Generates the static site described by an ``AppConfig``.

    Errors are not caught here: the first failing document aborts the run
    and the error propagates to the caller.
    """

    def __init__(self, config: Optional[AppConfig] = None, site_config_found: bool = True):
        """
        Initialize the builder.

        Args:
            config: Application configuration
            site_config_found: Whether ``site.config`` exists; when it does
                not, a suggested file is logged after the feed is written
        """
        self.config = config or AppConfig()
        self.site_config_found = site_config_found
        self.logger = logging.getLogger(__name__)

    @property
    def app_dir(self) -> Path:
        return self.config.build.app_dir

    @property
    def site_dir(self) -> Path:
        return self.config.build.site_dir

    def create_page_processor(self) -> PageProcessor:
        """Wire up a page processor with a fresh template engine."""
        file_processor = FileProcessor(site_dir_name=self.site_dir.name)
        engine = TemplateEngine(
            FileTemplateStore(self.app_dir / TEMPLATES_DIR),
            max_include_depth=self.config.build.max_include_depth
        )
        return PageProcessor(
            FrontmatterParser(),
            file_processor,
            engine,
            MarkdownRenderer(self.config.build.markdown_extensions)
        )

    def generate(self) -> BuildResult:
        """
        Run a full generation pass.

        Returns:
            BuildResult describing what was written

        Raises:
            ArcError: If any document, template or file operation fails
        """
        start = time.time()
        self.logger.info("-------- STARTING ARC GENERATE() --------")

        processor = self.create_page_processor()
        files = processor.file_processor

        files.create_directory(self.site_dir)
        result = BuildResult()
        result.assets_copied = files.copy_assets(self.app_dir, self.site_dir)

        content = processor.process_all_content(self.app_dir, self.site_dir, self.config.site)
        result.written = content.written
        result.posts = content.posts

        if content.posts and self.config.build.generate_rss:
            exporter = RssFeedExporter(files)
            result.feed_path = exporter.generate_feed(content.posts, self.site_dir, self.config.site)
            if not self.site_config_found:
                self.logger.info(
                    f"TIP: Create {self.app_dir / 'site.config'} to customize your RSS feed:\n"
                    f"{exporter.suggested_site_config(self.config.site)}"
                )

        result.duration = time.time() - start
        self.logger.info("-------- SITE GENERATION COMPLETE --------")
        return result
