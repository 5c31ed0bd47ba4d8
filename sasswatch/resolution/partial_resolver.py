"""
Partial-to-owner resolution.

Changed partials are replaced by the files that include them, walking up the
include chain until only compilable (non-partial) files remain. The include
relation is recomputed from disk on every call.
"""

from sasswatch.domain.partials import is_partial, partial_target_name
from sasswatch.errors import ResolutionDepthExceeded
from sasswatch.infrastructure.source_tree import SourceTree
from sasswatch.observability import get_logger
from sasswatch.resolution.import_scanner import ImportScanner
from sasswatch.watching.watcher import Watcher, match_files

logger = get_logger(__name__)

MAX_IMPORT_DEPTH = 10
SOURCE_GLOB = "**/*.s[ac]ss"


class PartialResolver:
    """Expands changed partials into the owner files that must be recompiled."""

    def __init__(
        self,
        source_tree: SourceTree,
        input_root: str | None,
        watchers: list[Watcher],
        scanner: ImportScanner | None = None,
        max_depth: int = MAX_IMPORT_DEPTH,
    ):
        """
        Args:
            source_tree: Filesystem view used for globbing and reading
            input_root: Directory the include names are relative to
            watchers: Watch patterns restricting the scanned candidates.
                Shared with the guard, so later registrations are seen.
            scanner: Import scanner (defaults to one over ``source_tree``)
            max_depth: Number of include levels resolvable before giving up
        """
        self.source_tree = source_tree
        self.input_root = input_root
        self.watchers = watchers
        self.scanner = scanner or ImportScanner(source_tree)
        self.max_depth = max_depth

    def resolve(self, changed: list[str], depth: int = 0) -> list[str]:
        """
        Replace partials in ``changed`` by their (transitive) owners.

        Non-partial paths pass through unchanged and first, importers are
        appended after them. Duplicates are kept.

        ``depth`` counts the resolution rounds already taken, not include
        levels: callers start at 0, and a round at depth ``max_depth`` with
        partials still pending fails. A chain of ``max_depth`` partials above
        the owner therefore resolves, one more does not.

        Raises:
            ResolutionDepthExceeded: More than ``max_depth`` include levels, or a cycle
            UnreadableSourceFile: A candidate file could not be read
        """
        partials = [p for p in changed if is_partial(p)]
        direct = [p for p in changed if not is_partial(p)]

        if not partials:
            return direct

        # A round at depth d discovers include level d + 1.
        if depth >= self.max_depth:
            raise ResolutionDepthExceeded(
                "Import cycle or excessive include depth",
                {"max_depth": self.max_depth, "partials": partials},
            )

        target_names = [partial_target_name(p, self.input_root) for p in partials]
        importers = self.scanner.find_importers(self._candidate_files(), target_names)

        logger.debug(
            "partials_expanded",
            depth=depth,
            partials=partials,
            importers=importers,
        )

        resolved = direct + importers
        if any(is_partial(p) for p in importers):
            return self.resolve(resolved, depth + 1)
        return resolved

    def _candidate_files(self) -> list[str]:
        pattern = f"{self.input_root}/{SOURCE_GLOB}" if self.input_root else SOURCE_GLOB
        return match_files(self.watchers, self.source_tree.glob(pattern))
