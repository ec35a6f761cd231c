"""
arcsite - a small static site generator.

Markdown documents with frontmatter are rendered through directive-based
HTML templates into a static site, with an RSS feed for posts.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
