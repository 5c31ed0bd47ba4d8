"""
File watcher - watchdog based stylesheet monitoring.

Filesystem events are filtered to stylesheets, made relative to the watched
root and handed to an ``EventDebouncer``; each debounced ``ChangeBatch`` is
passed to ``on_changes``.
"""

import asyncio
import fnmatch
from collections.abc import Awaitable, Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from sasswatch.domain.models import ChangeBatch
from sasswatch.domain.partials import is_stylesheet
from sasswatch.observability import get_logger
from sasswatch.watching.debouncer import EventDebouncer, FileEventType

logger = get_logger(__name__)


DEFAULT_EXCLUDE_PATTERNS = [
    ".git",
    "node_modules",
    ".sass-cache",
    "*.swp",
    "*~",
    ".DS_Store",
]


class StylesheetEventHandler(FileSystemEventHandler):
    """Watchdog handler forwarding stylesheet events to the debouncer."""

    def __init__(
        self,
        root: Path,
        debouncer: EventDebouncer,
        loop: asyncio.AbstractEventLoop,
        exclude_patterns: list[str] | None = None,
    ):
        super().__init__()
        self.root = root
        self.debouncer = debouncer
        self.exclude_patterns = exclude_patterns or DEFAULT_EXCLUDE_PATTERNS
        self._loop = loop

    def _relative(self, path: str) -> str:
        try:
            return Path(path).resolve().relative_to(self.root).as_posix()
        except ValueError:
            return Path(path).as_posix()

    def _should_ignore(self, rel_path: str) -> bool:
        for part in Path(rel_path).parts:
            if any(fnmatch.fnmatch(part, pattern) for pattern in self.exclude_patterns):
                return True
        return False

    def _wants(self, path: str) -> str | None:
        rel_path = self._relative(path)
        if self._should_ignore(rel_path) or not is_stylesheet(rel_path):
            return None
        return rel_path

    def _push_event(self, event_type: FileEventType, rel_path: str, rel_dest: str | None = None):
        # watchdog calls us from its own thread
        self._loop.call_soon_threadsafe(self.debouncer.push_event, event_type, rel_path, rel_dest)

    def _on_simple(self, event: FileSystemEvent, event_type: FileEventType):
        if event.is_directory:
            return
        rel_path = self._wants(event.src_path)
        if rel_path is None:
            return
        logger.debug("stylesheet_event", event_type=event_type.value, path=rel_path)
        self._push_event(event_type, rel_path)

    def on_created(self, event: FileSystemEvent):
        self._on_simple(event, FileEventType.CREATED)

    def on_modified(self, event: FileSystemEvent):
        self._on_simple(event, FileEventType.MODIFIED)

    def on_deleted(self, event: FileSystemEvent):
        self._on_simple(event, FileEventType.DELETED)

    def on_moved(self, event: FileSystemEvent):
        if event.is_directory:
            return

        src = self._wants(event.src_path)
        dest = self._wants(event.dest_path)

        if src and dest:
            self._push_event(FileEventType.MOVED, src, dest)
        elif src:
            self._push_event(FileEventType.DELETED, src)
        elif dest:
            # editors that save via a temp file end up here
            self._push_event(FileEventType.CREATED, dest)


class FileWatcher:
    """
    Watchdog based stylesheet watcher.

    Usage:
        watcher = FileWatcher(Path("."), on_changes=handle_batch)
        await watcher.start()
        ...
        await watcher.stop()
    """

    def __init__(
        self,
        root: Path,
        on_changes: Callable[[ChangeBatch], Awaitable[None]] | None = None,
        debounce_ms: int = 300,
        max_batch_window_ms: int = 5000,
        exclude_patterns: list[str] | None = None,
        recursive: bool = True,
    ):
        self.root = Path(root).resolve()
        self.on_changes = on_changes
        self.recursive = recursive
        self._exclude_patterns = exclude_patterns

        self.debouncer = EventDebouncer(
            debounce_ms=debounce_ms,
            max_batch_window_ms=max_batch_window_ms,
            on_batch_ready=self._on_batch_ready,
        )

        self._observer: Observer | None = None
        self._is_running = False

    async def start(self):
        if self._is_running:
            logger.warning("file_watcher_already_running", root=str(self.root))
            return

        if not self.root.exists():
            raise ValueError(f"Watch root does not exist: {self.root}")

        await self.debouncer.start()

        handler = StylesheetEventHandler(
            root=self.root,
            debouncer=self.debouncer,
            loop=asyncio.get_running_loop(),
            exclude_patterns=self._exclude_patterns,
        )
        self._observer = Observer()
        self._observer.schedule(handler, str(self.root), recursive=self.recursive)
        self._observer.start()

        self._is_running = True
        logger.info("file_watcher_started", root=str(self.root), recursive=self.recursive)

    async def stop(self):
        if not self._is_running:
            return
        self._is_running = False

        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        await self.debouncer.stop()
        logger.info("file_watcher_stopped", root=str(self.root))

    async def _on_batch_ready(self, batch: ChangeBatch):
        logger.info("file_watcher_batch_ready", changed=len(batch.changed), removed=len(batch.removed))

        if self.on_changes:
            try:
                await self.on_changes(batch)
            except Exception as e:
                logger.error("file_watcher_callback_failed", error=str(e), exc_info=True)

    @property
    def is_running(self) -> bool:
        return self._is_running
