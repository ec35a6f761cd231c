"""
RSS Exporter

Generates an RSS 2.0 feed (``feed.xml``) for the site's posts, including
the full rendered HTML of each post in ``content:encoded``.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from arcsite.content.files import FileProcessor
from arcsite.core.config.models import SiteConfig
from arcsite.utils import date_to_rfc822, escape_xml, format_rfc822, truncate_html


RSS_FEED_FILE = "feed.xml"
DESCRIPTION_LENGTH = 200
GENERATOR = "Arc Static Site Generator"


class RssFeedExporter:
    """
    RSS 2.0 feed exporter for posts.
    
    Posts are expected newest first. Posts missing a title, date or url are
    skipped and do not count towards ``rss_max_items``.
    """
    
    def __init__(self, file_processor: Optional[FileProcessor] = None):
        self.file_processor = file_processor or FileProcessor()
        self.logger = logging.getLogger(__name__)
    
    def generate_feed(
        self,
        posts: List[Dict[str, str]],
        site_dir: Union[str, Path],
        site_config: Optional[SiteConfig] = None,
        now: Optional[datetime] = None
    ) -> Path:
        """
        Build the feed and write it to ``site_dir/feed.xml``.
        
        Args:
            posts: Post metadata, sorted newest first
            site_dir: Output site directory
            site_config: Channel metadata (defaults when None)
            now: Build time used for ``lastBuildDate``
            
        Returns:
            Path of the written feed
        """
        site_config = site_config or SiteConfig()
        feed, item_count = self.build_feed(posts, site_config, now)
        
        feed_path = Path(site_dir) / RSS_FEED_FILE
        self.file_processor.write_file(feed_path, feed)
        
        self.logger.info(f"Generated RSS feed: {RSS_FEED_FILE} ({item_count} posts)")
        return feed_path
    
    def build_feed(
        self,
        posts: List[Dict[str, str]],
        site_config: SiteConfig,
        now: Optional[datetime] = None
    ) -> Tuple[str, int]:
        """
        Render the feed XML.
        
        Returns:
            Tuple of the XML text and the number of items included
        """
        now = now or datetime.now(timezone.utc)
        site_url = site_config.url
        
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">',
            '  <channel>',
            f'    <title>{escape_xml(site_config.title)}</title>',
            f'    <link>{escape_xml(site_url)}</link>',
            f'    <description>{escape_xml(site_config.description)}</description>',
            f'    <language>{escape_xml(site_config.language)}</language>',
            f'    <lastBuildDate>{format_rfc822(now)}</lastBuildDate>',
            f'    <generator>{GENERATOR}</generator>',
        ]
        
        item_count = 0
        for post in posts:
            if item_count >= site_config.rss_max_items:
                break
            item = self._build_item(post, site_url)
            if item is None:
                continue
            lines.extend(item)
            item_count += 1
        
        lines.extend(['  </channel>', '</rss>'])
        return "\n".join(lines) + "\n", item_count
    
    def _build_item(self, post: Dict[str, str], site_url: str) -> Optional[List[str]]:
        title = post.get("title")
        date = post.get("date")
        url = post.get("url")
        if not title or not date or not url:
            self.logger.debug(f"Skipping post without title, date or url: {post.get('url')}")
            return None
        
        absolute_url = site_url + (url if url.startswith("/") else "/" + url)
        excerpt = post.get("excerpt")
        content = post.get("rendered_content")
        
        lines = [
            '',
            '    <item>',
            f'      <title>{escape_xml(title)}</title>',
            f'      <link>{escape_xml(absolute_url)}</link>',
        ]
        
        if excerpt:
            lines.append(f'      <description>{escape_xml(excerpt)}</description>')
        elif content is not None:
            description = truncate_html(content, DESCRIPTION_LENGTH)
            lines.append(f'      <description>{escape_xml(description)}</description>')
        
        lines.append(f'      <pubDate>{date_to_rfc822(date)}</pubDate>')
        lines.append(f'      <guid isPermaLink="true">{escape_xml(absolute_url)}</guid>')
        
        if content is not None:
            cdata = content.replace("]]>", "]]]]><![CDATA[>")
            lines.append(f'      <content:encoded><![CDATA[{cdata}]]></content:encoded>')
        
        lines.append('    </item>')
        return lines
    
    @staticmethod
    def suggested_site_config(site_config: SiteConfig) -> str:
        """Example ``site.config`` text for sites that do not have one yet."""
        return "\n".join([
            "---",
            f"title: {site_config.title}",
            f"description: {site_config.description}",
            f"url: {site_config.url}",
            f"language: {site_config.language}",
            f"rss_max_items: {site_config.rss_max_items}",
            "---",
        ])
