"""
Watchdog event filtering
"""

from unittest.mock import MagicMock

import pytest
from watchdog.events import (
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from sasswatch.watching.debouncer import FileEventType
from sasswatch.watching.file_watcher import FileWatcher, StylesheetEventHandler


@pytest.fixture
def loop():
    return MagicMock()


@pytest.fixture
def handler(tmp_path, loop):
    return StylesheetEventHandler(root=tmp_path.resolve(), debouncer=MagicMock(), loop=loop)


def pushed(loop) -> list[tuple]:
    return [c.args[1:] for c in loop.call_soon_threadsafe.call_args_list]


class TestStylesheetEventHandler:
    def test_stylesheet_events_are_relative(self, handler, loop, tmp_path):
        root = tmp_path.resolve()
        handler.on_modified(FileModifiedEvent(str(root / "styles" / "main.sass")))
        handler.on_created(FileCreatedEvent(str(root / "styles" / "_colors.scss")))
        handler.on_deleted(FileDeletedEvent(str(root / "old.sass")))

        assert pushed(loop) == [
            (FileEventType.MODIFIED, "styles/main.sass", None),
            (FileEventType.CREATED, "styles/_colors.scss", None),
            (FileEventType.DELETED, "old.sass", None),
        ]

    def test_non_stylesheets_and_directories_are_ignored(self, handler, loop, tmp_path):
        root = tmp_path.resolve()
        handler.on_modified(FileModifiedEvent(str(root / "styles" / "main.css")))
        handler.on_modified(DirModifiedEvent(str(root / "styles")))

        assert pushed(loop) == []

    def test_excluded_directories(self, handler, loop, tmp_path):
        root = tmp_path.resolve()
        handler.on_modified(FileModifiedEvent(str(root / "node_modules" / "pkg" / "x.scss")))
        handler.on_modified(FileModifiedEvent(str(root / ".sass-cache" / "x.scss")))

        assert pushed(loop) == []

    def test_moves(self, handler, loop, tmp_path):
        root = tmp_path.resolve()
        handler.on_moved(FileMovedEvent(str(root / "a.sass"), str(root / "b.sass")))
        handler.on_moved(FileMovedEvent(str(root / "c.sass"), str(root / "c.sass.bak")))
        handler.on_moved(FileMovedEvent(str(root / "d.sass.tmp"), str(root / "d.sass")))

        assert pushed(loop) == [
            (FileEventType.MOVED, "a.sass", "b.sass"),
            (FileEventType.DELETED, "c.sass", None),
            (FileEventType.CREATED, "d.sass", None),
        ]


@pytest.mark.asyncio
async def test_missing_root_is_rejected(tmp_path):
    watcher = FileWatcher(tmp_path / "missing")

    with pytest.raises(ValueError):
        await watcher.start()

    assert not watcher.is_running
