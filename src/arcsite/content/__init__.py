"""
Content pipeline for arcsite.

Reads Markdown documents with frontmatter, renders them to HTML and writes
them through their templates.
"""

from .files import FileProcessor
from .frontmatter import FrontmatterParser
from .markdown import MarkdownRenderer
from .processor import ContentItem, ContentResult, PageProcessor, sort_posts

__all__ = [
    'FileProcessor',
    'FrontmatterParser',
    'MarkdownRenderer',
    'ContentItem',
    'ContentResult',
    'PageProcessor',
    'sort_posts',
]
