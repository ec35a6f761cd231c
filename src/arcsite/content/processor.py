"""
Content Processor

Turns the Markdown documents under ``posts`` and ``pages`` into HTML pages.
Every document is parsed before any is rendered, so the ``posts`` and
``latest_post`` template globals are complete when the first page renders.
"""

import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from arcsite.content.files import FileProcessor
from arcsite.content.frontmatter import FrontmatterParser
from arcsite.content.markdown import MarkdownRenderer
from arcsite.core.config.models import SiteConfig
from arcsite.core.exceptions import ArcError, ContentError, ErrorCode
from arcsite.core.templates import FileTemplateStore, TemplateEngine
from arcsite.utils import format_display_date, parse_iso_date


POSTS_DIR = "posts"
PAGES_DIR = "pages"
TEMPLATES_DIR = "templates"

CONTENT_VAR = "content"
RENDERED_CONTENT_VAR = "rendered_content"
URL_VAR = "url"
DATE_VAR = "date"
FORMATTED_DATE_VAR = "formatted_date"
TEMPLATE_VAR = "template"
TYPE_VAR = "type"
POSTS_VAR = "posts"
LATEST_POST_VAR = "latest_post"
SITE_VAR = "site"

POST_TYPE = "post"


@dataclass
class ContentItem:
    """A parsed document with its metadata and Markdown body."""

    path: Path
    metadata: Dict[str, str]
    markdown: str

    @property
    def is_post(self) -> bool:
        return self.metadata.get(TYPE_VAR) == POST_TYPE

    @property
    def template_name(self) -> Optional[str]:
        return self.metadata.get(TEMPLATE_VAR)


@dataclass
class ContentResult:
    """Outcome of processing all documents."""

    items: List[ContentItem] = field(default_factory=list)
    posts: List[Dict[str, str]] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)


def compare_post_dates(post1: Dict[str, str], post2: Dict[str, str]) -> int:
    """
    Order posts newest first.

    Posts without a date sort last. Dates that are not ISO dates are
    compared as strings.
    """
    date1 = post1.get(DATE_VAR)
    date2 = post2.get(DATE_VAR)

    if date1 is None and date2 is None:
        return 0
    if date1 is None:
        return 1
    if date2 is None:
        return -1

    parsed1 = parse_iso_date(date1)
    parsed2 = parse_iso_date(date2)
    if parsed1 is not None and parsed2 is not None:
        first, second = parsed2, parsed1
    else:
        first, second = date2, date1

    return (first > second) - (first < second)


def sort_posts(posts: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """Return posts sorted newest first."""
    return sorted(posts, key=functools.cmp_to_key(compare_post_dates))


class PageProcessor:
    """
    Processes all content (pages and posts) with unified logic.

    Handles metadata extraction, URL generation and rendering each document
    through the template named in its frontmatter.
    """

    def __init__(
        self,
        frontmatter_parser: FrontmatterParser,
        file_processor: FileProcessor,
        template_engine: TemplateEngine,
        markdown_renderer: MarkdownRenderer
    ):
        self.frontmatter_parser = frontmatter_parser
        self.file_processor = file_processor
        self.template_engine = template_engine
        self.markdown_renderer = markdown_renderer
        self.logger = logging.getLogger(__name__)

    def process_all_content(
        self,
        app_dir: Union[str, Path],
        site_dir: Union[str, Path],
        site_config: Optional[SiteConfig] = None
    ) -> ContentResult:
        """
        Process all Markdown files from the posts and pages directories.

        Args:
            app_dir: Application directory
            site_dir: Output site directory
            site_config: Site metadata, exposed to templates as ``site``

        Returns:
            ContentResult with the parsed items, sorted posts and written files

        Raises:
            ArcError: On the first document that fails; nothing after it is written
        """
        app_dir = Path(app_dir)
        site_dir = Path(site_dir)
        result = ContentResult()

        for dir_name in (POSTS_DIR, PAGES_DIR):
            directory = app_dir / dir_name
            if not directory.is_dir():
                continue
            files = self.file_processor.find_markdown_files(directory)
            self.logger.info(f"Found {len(files)} markdown {dir_name} to process")
            for file_path in files:
                result.items.append(self.process_file(file_path, app_dir, site_dir))

        result.posts = sort_posts([item.metadata for item in result.items if item.is_post])
        self.register_globals(result.posts, site_config or SiteConfig())

        if self.template_engine.store is None:
            self.template_engine.store = FileTemplateStore(app_dir / TEMPLATES_DIR)

        for item in result.items:
            result.written.append(self.generate_html(item, app_dir, site_dir))

        return result

    def register_globals(self, posts: List[Dict[str, str]], site_config: SiteConfig) -> None:
        """Register the variables shared by every template."""
        self.template_engine.register_global_variable(POSTS_VAR, posts)
        self.template_engine.register_global_variable(LATEST_POST_VAR, posts[0] if posts else None)
        self.template_engine.register_global_variable(SITE_VAR, site_config.as_template_variables())

    def process_file(self, file_path: Path, app_dir: Path, site_dir: Path) -> ContentItem:
        """Parse one document and compute its derived metadata."""
        try:
            text = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ContentError(
                f"Failed to read {file_path}: {e}",
                error_code=ErrorCode.CONTENT_READ_FAILED,
                document=str(file_path),
                cause=e
            )

        metadata, markdown_text = self.frontmatter_parser.split(text)

        output_path = self.file_processor.determine_output_path(file_path, app_dir, site_dir)
        metadata[URL_VAR] = self.generate_url(output_path, site_dir)
        metadata[CONTENT_VAR] = markdown_text
        metadata[RENDERED_CONTENT_VAR] = self.markdown_renderer.render(markdown_text)

        date_value = metadata.get(DATE_VAR)
        if date_value is not None:
            parsed = parse_iso_date(date_value)
            if parsed is not None:
                metadata[FORMATTED_DATE_VAR] = format_display_date(parsed)
            else:
                self.logger.warning(f"Unrecognized date '{date_value}' in {file_path}, expected YYYY-MM-DD")
                metadata[FORMATTED_DATE_VAR] = date_value

        return ContentItem(path=file_path, metadata=metadata, markdown=markdown_text)

    def generate_html(self, item: ContentItem, app_dir: Path, site_dir: Path) -> Path:
        """
        Render a document through its template and write the HTML.

        Returns:
            The path of the written file
        """
        template_name = item.template_name
        if not template_name:
            raise ContentError(
                f"No template specified in frontmatter for: {item.path}",
                error_code=ErrorCode.CONTENT_MISSING_TEMPLATE,
                document=str(item.path)
            )

        store = self.template_engine.store
        try:
            template = store.read(template_name)
            final_html = self.template_engine.process_template(
                template,
                item.metadata,
                item.metadata[RENDERED_CONTENT_VAR],
                store
            )
        except ArcError as e:
            e.with_document(str(item.path))
            raise

        output_path = self.file_processor.determine_output_path(item.path, app_dir, site_dir)
        self.file_processor.write_file(output_path, final_html)

        self.logger.info(f"Generated: {output_path.relative_to(site_dir)}")
        return output_path

    @staticmethod
    def generate_url(output_path: Path, site_dir: Path) -> str:
        """Site-absolute URL of an output file, e.g. ``/posts/hello.html``."""
        return "/" + output_path.relative_to(site_dir).as_posix()
