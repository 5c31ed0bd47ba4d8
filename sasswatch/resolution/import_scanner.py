"""
Textual import scan.

A file imports a partial when an include directive (``@import``, ``@use`` or
``@forward``) is followed, on the same line, by the partial's include name.
This is a containment test, not a parser: a commented-out import or a longer
name sharing the same prefix also matches. Over-building is preferred to
missing an owner.
"""

import re
from collections.abc import Iterable

from sasswatch.errors import UnreadableSourceFile
from sasswatch.infrastructure.source_tree import SourceTree
from sasswatch.observability import get_logger

logger = get_logger(__name__)

INCLUDE_DIRECTIVE = r"@(?:import|use|forward)\b"


def build_import_matcher(target_names: Iterable[str]) -> re.Pattern[str] | None:
    """One alternation over all target names; None when there is nothing to look for."""
    names = [re.escape(n) for n in target_names if n]
    if not names:
        return None
    return re.compile(rf"{INCLUDE_DIRECTIVE}.*(?:{'|'.join(names)})")


class ImportScanner:
    """Finds the files that directly import any of a set of partials."""

    def __init__(self, source_tree: SourceTree):
        self.source_tree = source_tree

    def find_importers(self, candidate_files: list[str], target_names: list[str]) -> list[str]:
        """
        Args:
            candidate_files: Paths eligible for scanning (already pattern-filtered)
            target_names: Marker- and extension-stripped include names

        Returns:
            Candidates containing at least one matching include, in candidate order

        Raises:
            UnreadableSourceFile: A candidate could not be read
        """
        matcher = build_import_matcher(target_names)
        if matcher is None:
            return []

        importers = []
        for path in candidate_files:
            try:
                text = self.source_tree.read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                raise UnreadableSourceFile(
                    "Cannot read stylesheet while scanning imports",
                    {"path": path, "reason": str(e)},
                ) from e

            if matcher.search(text):
                importers.append(path)

        logger.debug(
            "import_scan_complete",
            targets=target_names,
            candidates=len(candidate_files),
            importers=len(importers),
        )
        return importers
