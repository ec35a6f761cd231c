"""
Configuration Models

Pydantic models for type-safe configuration management with validation,
defaults, and field documentation.
"""

from pathlib import Path
from typing import Any, Dict, List
from pydantic import BaseModel, Field, field_validator, ConfigDict


DEFAULT_SITE_TITLE = "My Arc Site"
DEFAULT_SITE_DESCRIPTION = "A site generated with Arc"
DEFAULT_SITE_URL = "http://localhost:8080"
DEFAULT_SITE_AUTHOR = "Arc User"
DEFAULT_SITE_LANGUAGE = "en-us"
DEFAULT_RSS_MAX_ITEMS = 10


class SiteConfig(BaseModel):
    """Site-wide metadata, read from ``app/site.config``."""
    
    title: str = Field(default=DEFAULT_SITE_TITLE, description="Site title")
    description: str = Field(default=DEFAULT_SITE_DESCRIPTION, description="Site description")
    url: str = Field(default=DEFAULT_SITE_URL, description="Absolute base URL of the site")
    author: str = Field(default=DEFAULT_SITE_AUTHOR, description="Site author")
    language: str = Field(default=DEFAULT_SITE_LANGUAGE, description="Feed language code")
    rss_max_items: int = Field(
        default=DEFAULT_RSS_MAX_ITEMS,
        ge=0,
        description="Maximum number of posts in the RSS feed"
    )
    
    model_config = ConfigDict(extra="allow")
    
    @field_validator('url')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Store the base URL without a trailing slash."""
        return v.rstrip('/') if v != '/' else v
    
    @field_validator('rss_max_items', mode='before')
    @classmethod
    def parse_rss_max_items(cls, v):
        """Fall back to the default when the value is not an integer."""
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return DEFAULT_RSS_MAX_ITEMS
        return v
    
    def as_template_variables(self) -> Dict[str, str]:
        """Flatten the site metadata into string template variables."""
        return {key: str(value) for key, value in self.model_dump().items()}


class BuildConfig(BaseModel):
    """Configuration for site generation."""
    
    app_dir: Path = Field(
        default=Path("app"),
        description="Source directory holding posts, pages, templates and assets"
    )
    site_dir: Path = Field(
        default=Path("site"),
        description="Output directory for the generated site"
    )
    max_include_depth: int = Field(
        default=32,
        ge=1,
        le=1000,
        description="Deepest include nesting allowed in templates"
    )
    markdown_extensions: List[str] = Field(
        default_factory=lambda: ["fenced_code", "tables"],
        description="Python-Markdown extensions used to render documents"
    )
    generate_rss: bool = Field(
        default=True,
        description="Write feed.xml when the site has posts"
    )


class WatchConfig(BaseModel):
    """Configuration for watch mode."""
    
    extensions: List[str] = Field(
        default_factory=lambda: [".md", ".html", ".css", ".js", ".config"],
        description="File extensions that trigger a rebuild"
    )
    poll_interval: float = Field(
        default=0.1,
        gt=0,
        le=10.0,
        description="Seconds between checks for pending changes"
    )
    debounce: float = Field(
        default=0.2,
        ge=0,
        le=10.0,
        description="Quiet period after the last change before rebuilding"
    )
    
    @field_validator('extensions')
    @classmethod
    def normalize_extensions(cls, v):
        """Normalize extensions to lowercase with a leading dot."""
        normalized = []
        for ext in v:
            clean_ext = ext.strip().lower()
            if not clean_ext:
                continue
            normalized.append(clean_ext if clean_ext.startswith('.') else f".{clean_ext}")
        return normalized


class AppConfig(BaseModel):
    """Root application configuration model."""
    
    build: BuildConfig = Field(default_factory=BuildConfig, description="Build configuration")
    site: SiteConfig = Field(default_factory=SiteConfig, description="Site metadata")
    watch: WatchConfig = Field(default_factory=WatchConfig, description="Watch mode configuration")
    
    verbose: bool = Field(default=False, description="Enable verbose logging output")
    debug: bool = Field(default=False, description="Enable debug mode with detailed logging")
    
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )
    
    @property
    def templates_dir(self) -> Path:
        return self.build.app_dir / "templates"
    
    def summary(self) -> Dict[str, Any]:
        """Short description of the effective configuration."""
        return {
            'app_dir': str(self.build.app_dir),
            'site_dir': str(self.build.site_dir),
            'site_title': self.site.title,
            'site_url': self.site.url,
            'generate_rss': self.build.generate_rss,
        }
