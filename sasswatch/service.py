"""
Watch service - wires the file watcher to the guard.

Pipeline:
    FileWatcher (watchdog)
        ↓
    EventDebouncer
        ↓
    WatchHost.handle_batch
        ↓
    SassGuard.run_on_changes / run_on_removals

A failed pass is reported and the service keeps watching.
"""

import asyncio
from pathlib import Path

from sasswatch.config.groups import WatcherConfig
from sasswatch.domain.models import ChangeBatch
from sasswatch.errors import BuildError
from sasswatch.guard import SassGuard
from sasswatch.observability import get_logger, log_error
from sasswatch.watching.file_watcher import FileWatcher

logger = get_logger(__name__)


class WatchHost:
    """
    Runs the guard on debounced change batches, one pass at a time.

    Usage:
        host = WatchHost(guard, WatcherConfig())
        await host.start()
        await host.wait()   # until stop() or cancellation
    """

    def __init__(self, guard: SassGuard, config: WatcherConfig | None = None, root: Path | None = None):
        self.guard = guard
        self.config = config or WatcherConfig()
        self.root = root or guard.source_tree.root
        self.file_watcher = FileWatcher(
            root=self.root,
            on_changes=self.handle_batch,
            debounce_ms=self.config.debounce_ms,
            max_batch_window_ms=self.config.max_batch_window_ms,
            recursive=self.config.recursive,
        )
        self._pass_lock = asyncio.Lock()
        self._stopped = asyncio.Event()
        self.failed_passes = 0

    async def start(self):
        self._stopped.clear()
        self.run_pass(self.guard.start)
        await self.file_watcher.start()

    async def stop(self):
        await self.file_watcher.stop()
        self._stopped.set()

    async def wait(self):
        await self._stopped.wait()

    async def handle_batch(self, batch: ChangeBatch):
        # Passes block the loop; events queue in the debouncer until the pass ends.
        async with self._pass_lock:
            if batch.changed:
                self.run_pass(self.guard.run_on_changes, sorted(batch.changed))
            if batch.removed:
                self.run_pass(self.guard.run_on_removals, sorted(batch.removed))

    def run_pass(self, action, *args) -> bool:
        """Run one guard action; a BuildError fails the pass, not the process."""
        try:
            action(*args)
        except BuildError as e:
            self.failed_passes += 1
            log_error(logger, "build_pass_failed", error=e)
            return False
        return True
