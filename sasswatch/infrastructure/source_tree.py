"""Filesystem access for the resolver: glob and read relative to a root."""

from pathlib import Path

from sasswatch.observability import get_logger

logger = get_logger(__name__)


class SourceTree:
    """
    Read-only view of the stylesheet tree.

    Paths going in and out are POSIX strings relative to ``root``. Nothing is
    cached; every call hits the filesystem.
    """

    def __init__(self, root: Path | str | None = None):
        self.root = Path(root) if root is not None else Path.cwd()

    def glob(self, pattern: str) -> list[str]:
        """Files matching ``pattern`` under the root, sorted."""
        matches = sorted(p.relative_to(self.root).as_posix() for p in self.root.glob(pattern) if p.is_file())
        logger.debug("source_tree_glob", pattern=pattern, matched=len(matches))
        return matches

    def read_text(self, path: str) -> str:
        """Full text of ``path``. Raises ``OSError`` when unreadable."""
        return (self.root / path).read_text(encoding="utf-8")
