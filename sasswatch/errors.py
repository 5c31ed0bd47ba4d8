"""
sasswatch exception hierarchy

Every failure that aborts a build pass derives from ``BuildError``. The watch
host catches ``BuildError``, logs it and keeps watching; anything else is a bug
and propagates.

Example:
    try:
        text = path.read_text()
    except OSError as e:
        raise UnreadableSourceFile("Cannot read source file", {"path": str(path)}) from e
"""

from typing import Any


class SassWatchError(Exception):
    """Base exception for all sasswatch errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Configuration Errors
# ============================================================


class InvalidConfigurationError(SassWatchError):
    """Invalid guard options."""

    pass


# ============================================================
# Build Errors (abort the current pass only)
# ============================================================


class BuildError(SassWatchError):
    """A build pass failed. The watch process survives it."""

    pass


class ResolutionError(BuildError):
    """Partial-to-owner resolution failed."""

    pass


class ResolutionDepthExceeded(ResolutionError):
    """Import chain deeper than the ceiling, or an import cycle among partials."""

    pass


class UnreadableSourceFile(ResolutionError):
    """A candidate stylesheet could not be read while scanning for imports."""

    pass


class CompilationFailure(BuildError):
    """The compiler reported failure. No artifacts of the pass are trusted."""

    pass
