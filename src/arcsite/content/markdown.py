"""
Markdown Rendering

Converts document bodies from Markdown to HTML with Python-Markdown.
"""

from typing import List, Optional

import markdown

from arcsite.core.exceptions import ConfigurationError, ErrorCode


class MarkdownRenderer:
    """Renders Markdown text to HTML."""
    
    def __init__(self, extensions: Optional[List[str]] = None):
        """
        Initialize the renderer.
        
        Args:
            extensions: Python-Markdown extension names

        Raises:
            ConfigurationError: If an extension cannot be loaded
        """
        self.extensions = list(extensions or [])
        try:
            self._converter = markdown.Markdown(extensions=self.extensions, output_format='html')
        except (ImportError, AttributeError, TypeError) as e:
            raise ConfigurationError(
                f"Cannot load Markdown extension: {e}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                config_key="build.markdown_extensions",
                config_value=self.extensions,
                cause=e
            ) from e
    
    def render(self, text: str) -> str:
        """Convert Markdown to an HTML fragment."""
        # Footnotes and reference links are per document.
        self._converter.reset()
        html = self._converter.convert(text)
        return html + "\n" if html else html
