"""Tool registry: the host side of change notification."""

from sasswatch.observability import get_logger
from sasswatch.ports import ToolPort
from sasswatch.watching.watcher import match_files

logger = get_logger(__name__)


class ToolRegistry:
    """
    Registry of active tools.

    ``notify`` hands each tool only the subset of changed files its own
    watchers match; tools without a match are not called.
    """

    def __init__(self, tools: list[ToolPort] | None = None):
        self._tools: dict[str, ToolPort] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolPort) -> None:
        if tool.name in self._tools:
            logger.warning("tool_already_registered", tool=tool.name)
            return
        self._tools[tool.name] = tool
        logger.debug("tool_registered", tool=tool.name, watchers=len(tool.watchers))

    def unregister(self, name: str) -> None:
        self._tools.pop(name, None)

    @property
    def tools(self) -> list[ToolPort]:
        return list(self._tools.values())

    def notify(self, changed_files: list[str]) -> None:
        for tool in self.tools:
            paths = match_files(tool.watchers, changed_files)
            if not paths:
                continue
            logger.debug("tool_notified", tool=tool.name, paths=paths)
            tool.run_on_change(paths)
