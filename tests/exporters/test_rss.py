"""
Tests for the RSS Exporter
"""

from datetime import datetime, timezone
from unittest.mock import Mock

from arcsite.core.config.models import SiteConfig
from arcsite.exporters import RSS_FEED_FILE, RssFeedExporter


NOW = datetime(2025, 6, 1, 12, 30, 0, tzinfo=timezone.utc)


def make_post(title, date, url, content="<p>Body</p>\n", **extra):
    post = {'title': title, 'date': date, 'url': url, 'rendered_content': content}
    post.update(extra)
    return post


class TestBuildFeed:
    """Test feed XML generation."""

    def setup_method(self):
        """Set up test environment for each test."""
        self.exporter = RssFeedExporter()
        self.site = SiteConfig(
            title="Arc & Co",
            description="Notes",
            url="https://example.com/",
            language="en-gb",
        )

    def test_channel_metadata(self):
        """Test the channel carries the site metadata."""
        feed, count = self.exporter.build_feed([], self.site, NOW)

        assert count == 0
        assert feed.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">' in feed
        assert "<title>Arc &amp; Co</title>" in feed
        assert "<link>https://example.com</link>" in feed
        assert "<language>en-gb</language>" in feed
        assert "<lastBuildDate>Sun, 01 Jun 2025 12:30:00 +0000</lastBuildDate>" in feed
        assert "<generator>Arc Static Site Generator</generator>" in feed
        assert feed.endswith("  </channel>\n</rss>\n")

    def test_item(self):
        """Test a post becomes an item with absolute links."""
        post = make_post("Hello <World>", "2025-05-28", "/posts/hello.html")
        feed, count = self.exporter.build_feed([post], self.site, NOW)

        assert count == 1
        assert "\n\n    <item>\n" in feed
        assert "<title>Hello &lt;World&gt;</title>" in feed
        assert "<link>https://example.com/posts/hello.html</link>" in feed
        assert "<pubDate>Wed, 28 May 2025 00:00:00 +0000</pubDate>" in feed
        assert '<guid isPermaLink="true">https://example.com/posts/hello.html</guid>' in feed
        assert "<description>Body</description>" in feed
        assert "<content:encoded><![CDATA[<p>Body</p>\n]]></content:encoded>" in feed

    def test_excerpt_used_as_description(self):
        """Test an excerpt in the frontmatter replaces the generated description."""
        post = make_post("A", "2025-01-01", "/posts/a.html", excerpt="Short & sweet")
        feed, _ = self.exporter.build_feed([post], self.site, NOW)
        assert "<description>Short &amp; sweet</description>" in feed

    def test_long_description_truncated(self):
        """Test generated descriptions are cut at a word boundary."""
        content = "<p>" + "word " * 100 + "</p>"
        feed, _ = self.exporter.build_feed([make_post("A", "2025-01-01", "/a.html", content)], self.site, NOW)
        description = feed.split("<description>")[2].split("</description>")[0]
        assert description.endswith("...")
        assert len(description) <= 203

    def test_cdata_terminator_escaped(self):
        """Test content containing ]]> does not break the CDATA section."""
        post = make_post("A", "2025-01-01", "/a.html", "<p>a]]>b</p>")
        feed, _ = self.exporter.build_feed([post], self.site, NOW)
        assert "<![CDATA[<p>a]]]]><![CDATA[>b</p>]]>" in feed

    def test_incomplete_posts_skipped(self):
        """Test posts without title, date or url are left out."""
        posts = [
            make_post("", "2025-01-03", "/a.html"),
            {'title': 'No date', 'url': '/b.html'},
            make_post("Good", "2025-01-01", "/c.html"),
        ]
        feed, count = self.exporter.build_feed(posts, self.site, NOW)
        assert count == 1
        assert "<title>Good</title>" in feed
        assert "No date" not in feed

    def test_max_items(self):
        """Test at most rss_max_items posts are included."""
        site = SiteConfig(rss_max_items=2)
        posts = [make_post(f"P{i}", "2025-01-01", f"/p{i}.html") for i in range(5)]
        feed, count = self.exporter.build_feed(posts, site, NOW)
        assert count == 2
        assert "<title>P1</title>" in feed
        assert "<title>P2</title>" not in feed

    def test_relative_url_gets_slash(self):
        """Test urls without a leading slash are joined correctly."""
        feed, _ = self.exporter.build_feed([make_post("A", "2025-01-01", "posts/a.html")], self.site, NOW)
        assert "<link>https://example.com/posts/a.html</link>" in feed


class TestGenerateFeed:
    """Test writing the feed."""

    def test_writes_feed_file(self, tmp_path):
        """Test the feed is written to feed.xml in the site directory."""
        exporter = RssFeedExporter()
        path = exporter.generate_feed([make_post("A", "2025-01-01", "/a.html")], tmp_path, now=NOW)

        assert path == tmp_path / RSS_FEED_FILE
        text = path.read_text(encoding='utf-8')
        assert "<title>My Arc Site</title>" in text
        assert "<link>http://localhost:8080/a.html</link>" in text

    def test_uses_file_processor(self, tmp_path):
        """Test writing goes through the file processor."""
        files = Mock()
        RssFeedExporter(files).generate_feed([], tmp_path, SiteConfig(), NOW)
        files.write_file.assert_called_once()
        assert files.write_file.call_args[0][0] == tmp_path / RSS_FEED_FILE

    def test_suggested_site_config(self):
        """Test the example site.config text."""
        text = RssFeedExporter.suggested_site_config(SiteConfig())
        assert text.startswith("---\ntitle: My Arc Site\n")
        assert "rss_max_items: 10" in text
        assert text.endswith("---")
