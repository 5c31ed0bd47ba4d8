"""
Fake notification host and tool for unit testing
"""

from sasswatch.watching.watcher import Watcher


class FakeNotifier:
    """NotifierPort fake recording notify() calls."""

    def __init__(self, events: list | None = None):
        self.calls: list[list[str]] = []
        self.events = events if events is not None else []

    def notify(self, changed_files: list[str]) -> None:
        self.calls.append(list(changed_files))
        self.events.append(("notify", list(changed_files)))


class FakeTool:
    """ToolPort fake."""

    def __init__(self, name: str, *patterns: str):
        self.name = name
        self.watchers = [Watcher(p) for p in patterns]
        self.received: list[list[str]] = []

    def run_on_change(self, paths: list[str]) -> None:
        self.received.append(list(paths))
