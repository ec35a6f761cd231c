"""
Template Stores

A template store maps template names to their text. The file store reads
from the site's templates directory; the dictionary store keeps templates in
memory and is mostly useful for tests and previews.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, Union

from arcsite.core.exceptions import ErrorCode, TemplateError, TemplateNotFoundError


class TemplateStore(Protocol):
    """Read-only source of named template texts."""
    
    def read(self, name: str) -> str:
        """Return the text of ``name`` or raise ``TemplateNotFoundError``."""
        ...


class FileTemplateStore:
    """Template store rooted at a directory on disk."""
    
    def __init__(self, root: Union[str, Path], encoding: str = 'utf-8'):
        self.root = Path(root)
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)
    
    def path_for(self, name: str) -> Path:
        """Location of ``name`` inside the templates directory."""
        return self.root / name
    
    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()
    
    def read(self, name: str) -> str:
        path = self.path_for(name)
        if not path.is_file():
            raise TemplateNotFoundError(str(path))
        
        self.logger.debug(f"Reading template {path}")
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(
                f"Failed to read template {path}: {e}",
                error_code=ErrorCode.TEMPLATE_READ_FAILED,
                template=str(path),
                cause=e
            )
    
    def __repr__(self) -> str:
        return f"FileTemplateStore({str(self.root)!r})"


class DictTemplateStore:
    """In-memory template store."""
    
    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.templates: Dict[str, str] = dict(templates or {})
    
    def add(self, name: str, text: str) -> None:
        self.templates[name] = text
    
    def exists(self, name: str) -> bool:
        return name in self.templates
    
    def read(self, name: str) -> str:
        try:
            return self.templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None
