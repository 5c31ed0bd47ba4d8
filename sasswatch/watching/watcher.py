"""Watch patterns: which paths a tool cares about."""

import re
from collections.abc import Iterable


class Watcher:
    """
    A regex a tool registers to select the paths it handles.

    Matching is ``re.search`` against the POSIX path relative to the working
    root, so anchored patterns such as ``^styles/(.+\\.s[ac]ss)$`` behave as
    expected. The first capture group, when present, names the path relative
    to the watched directory.
    """

    def __init__(self, pattern: str | re.Pattern[str]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def match(self, path: str) -> re.Match[str] | None:
        return self.pattern.search(path)

    def __repr__(self) -> str:
        return f"Watcher({self.pattern.pattern!r})"


def match_files(watchers: Iterable[Watcher], paths: Iterable[str]) -> list[str]:
    """Keep, in order, the paths matched by at least one watcher."""
    watchers = list(watchers)
    return [p for p in paths if any(w.match(p) for w in watchers)]
