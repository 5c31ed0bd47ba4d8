"""
sasswatch - recompile Sass stylesheets when they change.

Changed partials (``_name.sass``) are resolved to the stylesheets that
include them before compiling.
"""

from sasswatch.config import SassOptions, Settings, WatcherConfig
from sasswatch.domain import ChangeBatch, CompileResult, is_partial
from sasswatch.errors import (
    BuildError,
    CompilationFailure,
    InvalidConfigurationError,
    ResolutionDepthExceeded,
    ResolutionError,
    SassWatchError,
    UnreadableSourceFile,
)
from sasswatch.guard import SassGuard
from sasswatch.host import ToolRegistry
from sasswatch.watching import Watcher, match_files

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "ChangeBatch",
    "CompilationFailure",
    "CompileResult",
    "InvalidConfigurationError",
    "ResolutionDepthExceeded",
    "ResolutionError",
    "SassGuard",
    "SassOptions",
    "SassWatchError",
    "Settings",
    "ToolRegistry",
    "UnreadableSourceFile",
    "WatcherConfig",
    "Watcher",
    "is_partial",
    "match_files",
]
