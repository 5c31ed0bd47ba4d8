"""
Sass guard: decides what to compile when stylesheets change.

Entry points used by the watch host:
    start()            full build when all_on_start is set
    run_all()          compile every non-partial stylesheet
    run_on_changes()   compile changed files, resolving partials to owners
    run_on_removals()  deliberately does nothing

Every pass is compile-then-notify: the compiler sees the full resolved set in
one call, and the host is notified only after a successful compile.
"""

import re
from pathlib import Path

from sasswatch.config.groups import SassOptions
from sasswatch.domain.partials import is_partial
from sasswatch.errors import CompilationFailure, InvalidConfigurationError
from sasswatch.host import ToolRegistry
from sasswatch.infrastructure.formatter import Formatter
from sasswatch.infrastructure.sass_runner import SassRunner
from sasswatch.infrastructure.source_tree import SourceTree
from sasswatch.observability import LogPerformance, get_logger
from sasswatch.ports import CompilerPort, NotifierPort
from sasswatch.resolution.partial_resolver import SOURCE_GLOB, PartialResolver
from sasswatch.watching.watcher import Watcher, match_files

logger = get_logger(__name__)


def input_watcher(input_root: str) -> Watcher:
    """Watch pattern registered for ``input``; group 1 is the path below it."""
    return Watcher(rf"^{re.escape(input_root)}/(.+\.s[ac]ss)$")


def relative_input(input_root: str, root: Path) -> str:
    """
    ``input_root`` as a POSIX path relative to ``root``.

    Watch events and globs are root-relative, so an absolute input is only
    usable when it lies below the working root.

    Raises:
        InvalidConfigurationError: ``input_root`` is absolute and not below ``root``
    """
    path = Path(input_root)
    if not path.is_absolute():
        return input_root

    for candidate, base in ((path, root), (path.resolve(), root.resolve())):
        try:
            relative = candidate.relative_to(base).as_posix()
        except ValueError:
            continue
        if relative != ".":
            return relative
        break

    raise InvalidConfigurationError(
        "Input directory must lie below the working root",
        {"input": input_root, "root": str(root)},
    )


class SassGuard:
    """
    Change dispatcher for a Sass tree.

    Usage:
        guard = SassGuard(options=SassOptions(input="styles", smart_partials=True))
        guard.start()
        guard.run_on_changes(["styles/_colors.sass"])  # compiles styles/main.sass
    """

    name = "sass"

    def __init__(
        self,
        watchers: list[Watcher] | None = None,
        options: SassOptions | None = None,
        runner: CompilerPort | None = None,
        notifier: NotifierPort | None = None,
        source_tree: SourceTree | None = None,
        formatter: Formatter | None = None,
    ):
        """
        Args:
            watchers: Extra watch patterns; one for ``options.input`` is added
            options: Guard options
            runner: Compiler (defaults to SassRunner over the sass executable)
            notifier: Host notified of written artifacts (defaults to an empty ToolRegistry)
            source_tree: Filesystem view (defaults to the current directory)
            formatter: Terminal reporter for the default runner
        """
        options = options or SassOptions()
        self.source_tree = source_tree or SourceTree()
        self.watchers = list(watchers or [])

        update = {"load_paths": list(options.load_paths)}
        if options.input:
            input_root = relative_input(options.input, self.source_tree.root)
            if options.output == options.input:
                update["output"] = input_root
            update["input"] = input_root
            update["load_paths"].append(input_root)
            self.watchers.append(input_watcher(input_root))
        self.options = options.model_copy(update=update)

        self.runner = runner or SassRunner(
            self.watchers,
            self.options,
            formatter=formatter,
            root=self.source_tree.root,
        )
        self.notifier = notifier or ToolRegistry()
        self.resolver = PartialResolver(
            source_tree=self.source_tree,
            input_root=self.options.input,
            watchers=self.watchers,
        )

    def start(self) -> None:
        """Build everything when ``all_on_start`` is set."""
        logger.info(
            "sass_guard_started",
            input=self.options.input,
            output=self.options.output,
            smart_partials=self.options.smart_partials,
        )
        if self.options.all_on_start:
            self.run_all()

    def run_all(self) -> list[str]:
        """Compile every watched, non-partial stylesheet under the working root."""
        files = [f for f in self.source_tree.glob(SOURCE_GLOB) if not is_partial(f)]
        return self.run_on_changes(match_files(self.watchers, files))

    def run_on_changes(self, paths: list[str]) -> list[str]:
        """
        Compile ``paths``. Partials are never compiled themselves.

        Returns:
            Artifacts written by the pass (possibly empty)

        Raises:
            BuildError: The pass was aborted (resolution or compile failure)
        """
        if any(is_partial(p) for p in paths):
            return self.run_with_partials(paths)
        return self.dispatch(paths)

    def run_with_partials(self, paths: list[str]) -> list[str]:
        if not self.options.smart_partials:
            # Owners are unknown without resolution.
            logger.info("partial_changed_rebuilding_all", partials=[p for p in paths if is_partial(p)])
            return self.run_all()

        resolved = self.resolve_partials_to_owners(paths)
        logger.info("partials_resolved", changed=paths, resolved=resolved)
        return self.run_on_changes(match_files(self.watchers, resolved))

    def resolve_partials_to_owners(self, paths: list[str], depth: int = 0) -> list[str]:
        return self.resolver.resolve(paths, depth)

    def dispatch(self, paths: list[str]) -> list[str]:
        """
        Compile ``paths`` in one compiler call, then notify the host.

        The compiler is invoked even for an empty set, and a successful pass
        notifies even when nothing was written.

        Raises:
            CompilationFailure: The compiler reported failure; nothing is notified
        """
        with LogPerformance(logger, "sass_compile_pass", files=len(paths)):
            result = self.runner.run(paths)

        if not result.success:
            raise CompilationFailure(
                "Sass compilation failed",
                {"paths": paths, "written": result.changed_files},
            )

        self.notify(result.changed_files)
        return result.changed_files

    def run_on_removals(self, paths: list[str]) -> None:
        """Removed stylesheets never trigger a compile; stale CSS is left in place."""
        logger.debug("sass_removals_ignored", paths=paths)

    def notify(self, changed_files: list[str]) -> None:
        self.notifier.notify(changed_files)
