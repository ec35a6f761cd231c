"""
arcsite Hot Reload Watcher

Watches the application directory and regenerates the site when content,
templates or assets change.

File system events arrive on watchdog's observer thread and only mark a
rebuild as pending. Rebuilds run one at a time on the thread that called
``watch()``, so a rebuild never overlaps another one. Each rebuild is a
complete generation pass.
"""

import time
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from arcsite.core.exceptions import ArcError

logger = logging.getLogger(__name__)


@dataclass
class RebuildEvent:
    """Outcome of one rebuild."""
    trigger: Optional[Path]
    timestamp: float
    success: bool
    duration: float = 0.0
    error: Optional[str] = None


class SiteChangeHandler(FileSystemEventHandler):
    """File system event handler that filters changes worth a rebuild."""

    def __init__(self, watcher: 'SiteWatcher'):
        super().__init__()
        self.watcher = watcher
        self.logger = logging.getLogger(f"{__name__}.ChangeHandler")

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        paths = [event.src_path]
        dest_path = getattr(event, 'dest_path', None)
        if dest_path:
            paths.append(dest_path)

        for raw_path in paths:
            if isinstance(raw_path, bytes):
                raw_path = raw_path.decode()
            file_path = Path(raw_path)
            if self.watcher.is_watched_file(file_path):
                self.logger.debug(f"{event.event_type}: {file_path}")
                self.watcher.notify_change(file_path)
                return


class SiteWatcher:
    """
    Rebuilds the site whenever a watched file changes.

    Changes inside hidden directories and the site output directory are
    ignored, as are files whose extension is not in ``extensions``.
    """

    def __init__(
        self,
        watch_dir: Union[str, Path],
        on_change: Callable[[], object],
        extensions: Iterable[str] = (".md", ".html", ".css", ".js", ".config"),
        ignored_dirs: Iterable[str] = ("site",),
        poll_interval: float = 0.1,
        debounce: float = 0.2
    ):
        """
        Initialize the watcher.

        Args:
            watch_dir: Directory to watch recursively
            on_change: Callback that regenerates the site
            extensions: File extensions that trigger a rebuild
            ignored_dirs: Directory names whose contents are ignored
            poll_interval: Seconds between checks for pending changes
            debounce: Quiet period after the last change before rebuilding
        """
        self.watch_dir = Path(watch_dir)
        self.on_change = on_change
        self.extensions = {ext.lower() for ext in extensions}
        self.ignored_dirs = set(ignored_dirs)
        self.poll_interval = poll_interval
        self.debounce = debounce

        self.observer: Optional[Observer] = None
        self.handler = SiteChangeHandler(self)
        self.history: List[RebuildEvent] = []
        self.rebuild_callbacks: List[Callable[[RebuildEvent], None]] = []

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._pending: Optional[Path] = None
        self._last_change = 0.0

    def is_watched_file(self, file_path: Path) -> bool:
        """Check whether a change to ``file_path`` should trigger a rebuild."""
        if file_path.suffix.lower() not in self.extensions:
            return False

        try:
            relative = file_path.resolve().relative_to(self.watch_dir.resolve())
        except ValueError:
            relative = file_path

        for part in relative.parts[:-1]:
            if part.startswith('.') or part in self.ignored_dirs:
                return False
        return not file_path.name.startswith('.')

    def notify_change(self, file_path: Path) -> None:
        """Record a change; called from the observer thread."""
        with self._lock:
            self._pending = file_path
            self._last_change = time.monotonic()

    @property
    def has_pending_change(self) -> bool:
        with self._lock:
            return self._pending is not None

    def add_rebuild_callback(self, callback: Callable[[RebuildEvent], None]) -> None:
        """Add a callback invoked after every rebuild."""
        self.rebuild_callbacks.append(callback)

    def start(self) -> None:
        """Start the file system observer."""
        if not self.watch_dir.is_dir():
            raise FileNotFoundError(f"Watch directory does not exist: {self.watch_dir}")

        self._stop_event.clear()
        self.observer = Observer()
        self.observer.schedule(self.handler, str(self.watch_dir), recursive=True)
        self.observer.start()
        logger.info(f"Watching: {self.watch_dir}")

    def stop(self) -> None:
        """Stop watching; ``watch()`` returns after the current rebuild."""
        self._stop_event.set()
        if self.observer:
            self.observer.stop()
            self.observer.join()
            self.observer = None
        logger.info("Hot reload watcher stopped")

    def rebuild(self, trigger: Optional[Path] = None) -> RebuildEvent:
        """
        Run the rebuild callback once.

        Errors raised by the callback are logged and recorded; they do not
        stop the watcher.
        """
        start = time.monotonic()
        error = None
        try:
            self.on_change()
        except ArcError as e:
            error = e.message
            logger.error(f"Error during rebuild: {e.get_user_message()}")
        except OSError as e:
            error = str(e)
            logger.error(f"Error during rebuild: {e}")
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            logger.error(f"Unexpected error during rebuild: {error}")
            logger.exception(e)

        event = RebuildEvent(
            trigger=trigger,
            timestamp=time.time(),
            success=error is None,
            duration=time.monotonic() - start,
            error=error
        )
        self.history.append(event)

        for callback in self.rebuild_callbacks:
            callback(event)

        return event

    def process_pending(self) -> Optional[RebuildEvent]:
        """
        Rebuild if a change is pending and the debounce period has passed.

        Returns:
            The rebuild event, or None when nothing was rebuilt
        """
        with self._lock:
            if self._pending is None:
                return None
            if time.monotonic() - self._last_change < self.debounce:
                return None
            trigger = self._pending
            self._pending = None

        logger.info(f"CHANGE DETECTED AT {time.strftime('%H:%M:%S')} --> {trigger}")
        return self.rebuild(trigger)

    def watch(self) -> None:
        """
        Build once, then rebuild on every change until ``stop()`` is called.

        Blocks the calling thread.
        """
        self.start()
        try:
            self.rebuild()
            while not self._stop_event.is_set():
                self.process_pending()
                self._stop_event.wait(self.poll_interval)
        finally:
            if self.observer:
                self.stop()
