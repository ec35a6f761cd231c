"""
Frontmatter Parser

Separates the ``---`` delimited metadata block at the top of a document from
its Markdown body and parses the block's ``key: value`` lines.
"""

from typing import Dict, Tuple


OPENING_DELIMITERS = ("---\n", "---\r\n")
CLOSING_DELIMITERS = ("\n---\n", "\n---\r\n")


class FrontmatterParser:
    """Parser for YAML-style frontmatter in Markdown files."""
    
    def parse(self, frontmatter: str) -> Dict[str, str]:
        """
        Parse frontmatter text into a flat mapping.
        
        Lines without a colon are ignored. The key and value are split at the
        first colon, whitespace is trimmed and one layer of surrounding quotes
        is removed from the value.
        
        Args:
            frontmatter: The frontmatter content without delimiters
            
        Returns:
            Mapping of frontmatter keys to string values
        """
        result: Dict[str, str] = {}
        if not frontmatter:
            return result
        
        for line in frontmatter.splitlines():
            line = line.strip()
            if not line or ':' not in line:
                continue
            
            key, value = line.split(':', 1)
            result[key.strip()] = self._remove_quotes(value.strip())
        
        return result
    
    @staticmethod
    def _remove_quotes(value: str) -> str:
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            return value[1:-1]
        return value
    
    def extract_frontmatter(self, content: str) -> str:
        """
        Return the frontmatter block without its delimiters.
        
        A file made only of frontmatter, with the closing ``---`` as its last
        line, is accepted. Returns an empty string when there is no block.
        """
        if not content.startswith(OPENING_DELIMITERS):
            return ""
        
        start = content.index("\n") + 1
        end = self._closing_index(content)
        
        if end == -1:
            trimmed = content.rstrip()
            if trimmed.endswith("---"):
                last_dash = trimmed.rfind("\n---")
                if last_dash > 0:
                    return content[start:last_dash]
            return ""
        
        return content[start:end]
    
    def extract_content(self, content: str) -> str:
        """Return the document body after the frontmatter block."""
        if not content.startswith(OPENING_DELIMITERS):
            return content
        
        end = self._closing_index(content)
        if end == -1:
            trimmed = content.rstrip()
            if trimmed.endswith("---") and trimmed.rfind("\n---") > 0:
                return ""
            return content

        return content[content.index("\n", end + 1) + 1:]
    
    def split(self, content: str) -> Tuple[Dict[str, str], str]:
        """Return ``(metadata, body)`` for a whole document."""
        return self.parse(self.extract_frontmatter(content)), self.extract_content(content)
    
    @staticmethod
    def _closing_index(content: str) -> int:
        """Index of the newline that starts the closing delimiter, or -1."""
        positions = [content.find(d) for d in CLOSING_DELIMITERS]
        positions = [p for p in positions if p != -1]
        return min(positions) if positions else -1
