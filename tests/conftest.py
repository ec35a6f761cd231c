"""
Shared Test Fixtures

Sample site trees and ready-made collaborators used across the test suite.
"""

from pathlib import Path
from typing import Dict

import pytest

from arcsite.core.config.models import AppConfig, BuildConfig
from arcsite.core.templates import DictTemplateStore, TemplateEngine


SAMPLE_TEMPLATES: Dict[str, str] = {
    'header.html': '<header>{{ site.title }}</header>\n',
    'footer.html': '<footer>{{ site.author }}</footer>\n',
    'post.html': (
        '{% include "header.html" %}'
        '<h1>{{ title }}</h1>\n'
        '<time>{{ formatted_date }}</time>\n'
        '{{ content }}'
        '{% include "footer.html" %}'
    ),
    'page.html': (
        '{% include "header.html" %}'
        '<h1>{{ title }}</h1>\n'
        '{{ content }}'
        '{% if latest_post %}<a href="{{ latest_post.url }}">{{ latest_post.title }}</a>\n{% endif %}'
        '{% include "footer.html" %}'
    ),
    'index.html': (
        '<ul>\n'
        '{% for post in posts %}<li><a href="{{post.url}}">{{post.title}}</a></li>\n{% endfor %}'
        '</ul>\n'
    ),
}


def write_tree(root: Path, files: Dict[str, str]) -> None:
    """Create ``files`` (relative path -> text) below ``root``."""
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')


@pytest.fixture
def engine():
    """Template engine without a template store."""
    return TemplateEngine()


@pytest.fixture
def template_store():
    """In-memory store preloaded with the sample templates."""
    return DictTemplateStore(SAMPLE_TEMPLATES)


@pytest.fixture
def sample_site(tmp_path):
    """
    A small application directory with two posts, two pages and assets.

    Returns the ``app`` directory; the site is generated into ``tmp_path/site``.
    """
    app_dir = tmp_path / "app"
    files = {f"templates/{name}": text for name, text in SAMPLE_TEMPLATES.items()}
    files.update({
        'posts/first-post.md': (
            '---\n'
            'title: First Post\n'
            'date: 2025-05-01\n'
            'template: post.html\n'
            'type: post\n'
            '---\n'
            '# Hello\n'
            '\n'
            'The first post.\n'
        ),
        'posts/second-post.md': (
            '---\n'
            'title: "Second Post"\n'
            'date: 2025-05-28\n'
            'template: post.html\n'
            'type: post\n'
            '---\n'
            'The second post.\n'
        ),
        'pages/about.md': (
            '---\n'
            'title: About\n'
            'template: page.html\n'
            '---\n'
            'About this site.\n'
        ),
        'pages/index.md': (
            '---\n'
            'title: Home\n'
            'template: index.html\n'
            '---\n'
        ),
        'assets/css/style.css': 'body { color: black; }\n',
        'assets/js/app.js': 'console.log("arc");\n',
        'site.config': (
            '---\n'
            'title: Test Site\n'
            'description: A test site\n'
            'url: https://example.com/\n'
            'author: Tester\n'
            'rss_max_items: 5\n'
            '---\n'
        ),
    })
    write_tree(app_dir, files)
    return app_dir


@pytest.fixture
def app_config(sample_site):
    """Configuration pointing at the sample site."""
    return AppConfig(build=BuildConfig(
        app_dir=sample_site,
        site_dir=sample_site.parent / "site"
    ))


@pytest.fixture
def make_tree():
    """Factory fixture writing a mapping of relative paths to file text."""
    return write_tree
