"""
File Operations

Finds content files, mirrors static assets and writes generated pages.
"""

import shutil
import logging
from pathlib import Path
from typing import Iterable, List, Union

from arcsite.core.exceptions import ArcError, ErrorCode, ErrorContext


ASSETS_DIR = "assets"
PAGES_DIR = "pages"


class FileProcessor:
    """
    File system operations for site generation.
    
    Hidden directories and the site output directory are never treated as
    content.
    """
    
    def __init__(self, site_dir_name: str = "site"):
        self.site_dir_name = site_dir_name
        self.logger = logging.getLogger(__name__)
    
    def _is_skipped_dir(self, name: str) -> bool:
        return name.startswith('.') or name == self.site_dir_name
    
    def find_markdown_files(self, directory: Union[str, Path]) -> List[Path]:
        """
        Find all Markdown files below a directory.
        
        Args:
            directory: The root directory to search
            
        Returns:
            Sorted list of ``.md`` file paths, empty when the directory is missing
        """
        directory = Path(directory)
        if not directory.is_dir():
            return []
        
        found: List[Path] = []
        self._walk(directory, found)
        return sorted(found)
    
    def _walk(self, directory: Path, found: List[Path]) -> None:
        for entry in directory.iterdir():
            if entry.is_dir():
                if not self._is_skipped_dir(entry.name):
                    self._walk(entry, found)
            elif entry.suffix == '.md':
                found.append(entry)
    
    def copy_assets(self, app_dir: Union[str, Path], site_dir: Union[str, Path]) -> int:
        """
        Mirror ``app_dir/assets`` into ``site_dir/assets``.
        
        Returns:
            Number of files copied
        """
        source = Path(app_dir) / ASSETS_DIR
        target = Path(site_dir) / ASSETS_DIR
        
        if not source.is_dir():
            return 0
        
        copied = 0
        for file_path in self._iter_files(source):
            destination = target / file_path.relative_to(source)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(file_path, destination)
            except OSError as e:
                raise ArcError(
                    f"Failed to copy asset {file_path}: {e}",
                    error_code=ErrorCode.FS_WRITE_FAILED,
                    context=ErrorContext(operation="copy_assets", file_path=str(file_path)),
                    cause=e
                )
            copied += 1
        
        self.logger.info(f"Copied {copied} assets to: {target}")
        return copied
    
    def _iter_files(self, directory: Path) -> Iterable[Path]:
        for path in sorted(directory.rglob('*')):
            if path.is_file():
                yield path
    
    def determine_output_path(
        self,
        source_file: Union[str, Path],
        app_dir: Union[str, Path],
        site_dir: Union[str, Path]
    ) -> Path:
        """
        Determine where the HTML for a source document is written.
        
        Documents directly inside a ``pages`` directory go to the site root;
        everything else keeps its path relative to the application directory.
        
        Args:
            source_file: The source Markdown file
            app_dir: The application directory
            site_dir: The site output directory
            
        Returns:
            The output ``.html`` path
        """
        source_file = Path(source_file)
        site_dir = Path(site_dir)
        file_name = source_file.with_suffix('.html').name
        
        if source_file.parent.name == PAGES_DIR:
            return site_dir / file_name
        
        relative = source_file.relative_to(app_dir)
        return site_dir / relative.parent / file_name
    
    def write_file(self, output_path: Union[str, Path], content: str) -> None:
        """Write text to a file, creating parent directories as needed."""
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise ArcError(
                f"Failed to write {output_path}: {e}",
                error_code=ErrorCode.FS_WRITE_FAILED,
                context=ErrorContext(operation="write_file", file_path=str(output_path)),
                cause=e
            )
    
    def create_directory(self, directory: Union[str, Path]) -> None:
        """Create a directory if it doesn't exist."""
        Path(directory).mkdir(parents=True, exist_ok=True)
