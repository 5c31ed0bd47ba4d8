"""
Event debouncer - coalesces filesystem events into batches.

- Debounce: a batch is flushed once no event arrived for ``debounce_ms``
- Batch window: a batch is force-flushed ``max_batch_window_ms`` after its first event
- Latest wins: only the last event per path is kept
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from sasswatch.domain.models import ChangeBatch
from sasswatch.observability import get_logger

logger = get_logger(__name__)


class FileEventType(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    MOVED = "moved"


@dataclass
class FileEvent:
    event_type: FileEventType
    file_path: str
    dest_path: str | None = None  # MOVED only


class EventDebouncer:
    """
    Filesystem event debouncer.

    ``push_event`` is safe to call from watchdog threads through
    ``loop.call_soon_threadsafe``; everything else runs on the event loop.

    Usage:
        debouncer = EventDebouncer(debounce_ms=300, on_batch_ready=handle_batch)
        await debouncer.start()
        debouncer.push_event(FileEventType.MODIFIED, "styles/main.sass")
    """

    def __init__(
        self,
        debounce_ms: int = 300,
        max_batch_window_ms: int = 5000,
        on_batch_ready: Callable[[ChangeBatch], Awaitable[None]] | None = None,
        max_queue_size: int = 10000,
    ):
        self.debounce_ms = debounce_ms
        self.max_batch_window_ms = max_batch_window_ms
        self.on_batch_ready = on_batch_ready
        self.max_queue_size = max_queue_size

        self._queue: asyncio.Queue[FileEvent] = asyncio.Queue(maxsize=max_queue_size)

        # file_path -> latest event
        self._events: dict[str, FileEvent] = {}
        self._lock = asyncio.Lock()

        self._debounce_task: asyncio.Task | None = None
        self._batch_window_task: asyncio.Task | None = None

        self._is_running = False
        self._consumer_task: asyncio.Task | None = None

    async def start(self):
        self._is_running = True
        self._consumer_task = asyncio.create_task(self._consumer_loop())
        logger.debug(
            "event_debouncer_started",
            debounce_ms=self.debounce_ms,
            max_batch_window_ms=self.max_batch_window_ms,
        )

    async def stop(self):
        """Stop consuming and flush whatever is buffered."""
        self._is_running = False

        if self._consumer_task and not self._consumer_task.done():
            self._consumer_task.cancel()
            try:
                await self._consumer_task
            except asyncio.CancelledError:
                pass

        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()
        if self._batch_window_task and not self._batch_window_task.done():
            self._batch_window_task.cancel()

        while not self._queue.empty():
            self._buffer(self._queue.get_nowait())

        if self._events:
            await self._flush()

        logger.debug("event_debouncer_stopped")

    def push_event(self, event_type: FileEventType, file_path: str, dest_path: str | None = None):
        if not self._is_running:
            logger.warning("event_debouncer_not_running", file_path=file_path)
            return

        try:
            self._queue.put_nowait(FileEvent(event_type=event_type, file_path=file_path, dest_path=dest_path))
        except asyncio.QueueFull:
            logger.error("event_queue_full", file_path=file_path, max_queue_size=self.max_queue_size)

    async def _consumer_loop(self):
        while self._is_running:
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.1)
            except asyncio.TimeoutError:
                continue

            async with self._lock:
                self._buffer(event)
                if self._batch_window_task is None or self._batch_window_task.done():
                    self._batch_window_task = asyncio.create_task(self._batch_window_timer())
                self._reset_debounce_timer()

    def _buffer(self, event: FileEvent):
        self._events[event.file_path] = event
        if event.event_type == FileEventType.MOVED and event.dest_path:
            self._events[event.dest_path] = FileEvent(FileEventType.CREATED, event.dest_path)

    def _reset_debounce_timer(self):
        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(self._debounce_timer())

    async def _debounce_timer(self):
        try:
            await asyncio.sleep(self.debounce_ms / 1000)
        except asyncio.CancelledError:
            return  # reset
        await self._flush()

    async def _batch_window_timer(self):
        try:
            await asyncio.sleep(self.max_batch_window_ms / 1000)
        except asyncio.CancelledError:
            return  # flushed first
        logger.info("batch_window_expired")
        await self._flush()

    async def _flush(self):
        async with self._lock:
            if not self._events:
                return

            events = dict(self._events)
            self._events.clear()

            current = asyncio.current_task()
            for task in (self._batch_window_task, self._debounce_task):
                if task and task is not current and not task.done():
                    task.cancel()

            batch = self.build_batch(events)
            logger.debug("events_flushed", changed=len(batch.changed), removed=len(batch.removed))

            if self.on_batch_ready and not batch.is_empty():
                await self.on_batch_ready(batch)

    @staticmethod
    def build_batch(events: dict[str, FileEvent]) -> ChangeBatch:
        batch = ChangeBatch()
        for file_path, event in events.items():
            if event.event_type in (FileEventType.CREATED, FileEventType.MODIFIED):
                batch.changed.add(file_path)
            else:
                # MOVED source is gone; its destination was buffered as CREATED
                batch.removed.add(file_path)
        return batch

    def get_pending_count(self) -> int:
        return len(self._events)
