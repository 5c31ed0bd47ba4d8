"""
Collaborator Ports

Structural interfaces the guard depends on. Concrete adapters live in
``sasswatch.infrastructure`` (compiler) and ``sasswatch.host`` (notifier).
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from sasswatch.domain.models import CompileResult
from sasswatch.watching.watcher import Watcher


@runtime_checkable
class CompilerPort(Protocol):
    """Compiles stylesheets to output artifacts."""

    @abstractmethod
    def run(self, paths: list[str]) -> CompileResult:
        """
        Compile every path in one call.

        Args:
            paths: Non-partial stylesheet paths (may be empty)

        Returns:
            CompileResult with the artifacts written and a success flag.
            When ``success`` is False none of the artifacts are trusted.
        """
        ...


@runtime_checkable
class NotifierPort(Protocol):
    """Broadcasts changed artifacts to the other active tools."""

    @abstractmethod
    def notify(self, changed_files: list[str]) -> None:
        ...


@runtime_checkable
class ToolPort(Protocol):
    """A tool registered with the host, e.g. a live-reload server or a CSS minifier."""

    name: str
    watchers: list[Watcher]

    @abstractmethod
    def run_on_change(self, paths: list[str]) -> None:
        """Handle the changed paths matching this tool's watchers."""
        ...
