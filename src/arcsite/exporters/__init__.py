"""
Exporters for arcsite.

Output formats generated alongside the HTML pages.
"""

from .rss import RssFeedExporter, RSS_FEED_FILE

__all__ = ['RssFeedExporter', 'RSS_FEED_FILE']
