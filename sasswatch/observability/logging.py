"""
Structured Logging with structlog

All sasswatch modules log through ``get_logger(__name__)`` with snake_case
event names and keyword context:

    logger.info("partials_resolved", changed=2, resolved=5)
"""

import logging
import sys
import time
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars


def setup_logging(
    level: str = "INFO",
    format: str = "console",  # "json" or "console"
    include_timestamp: bool = True,
) -> None:
    """
    Setup structured logging for the watcher process.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for log shipping, "console" for a terminal)
        include_timestamp: Include timestamp in logs
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )

    shared_processors = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))

    shared_processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]
    )

    if format == "json":
        output_processors = [
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=shared_processors + output_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ from calling module)
    """
    return structlog.get_logger(name)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    message: str,
    error: Exception | None = None,
    **extra: Any,
) -> None:
    """
    Log an error with consistent structure.

    ``SassWatchError.details`` are flattened into the event so that the
    offending path or depth shows up as a field.
    """
    error_data = extra.copy()

    if error:
        error_data.update(
            {
                "error_type": type(error).__name__,
                "error_message": getattr(error, "message", str(error)),
            }
        )
        error_data.update(getattr(error, "details", {}) or {})

    logger.error(message, **error_data)


def log_performance(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    duration_ms: float,
    **extra: Any,
) -> None:
    """Log a timed operation; anything over a second is reported as slow."""
    perf_data = {
        "operation": operation,
        "duration_ms": round(duration_ms, 2),
        **extra,
    }

    if duration_ms > 1000:
        perf_data["slow"] = True
        logger.warning("slow_operation", **perf_data)
    else:
        logger.info("operation_complete", **perf_data)


class LogPerformance:
    """
    Context manager for automatic performance logging.

    Example:
        with LogPerformance(logger, "compile_pass", files=3):
            runner.run(paths)
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **extra: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.extra = extra
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        duration_ms = (time.time() - self.start_time) * 1000

        if exc_type is not None:
            log_error(
                self.logger,
                f"{self.operation}_failed",
                error=exc_val,
                duration_ms=round(duration_ms, 2),
                **self.extra,
            )
        else:
            log_performance(self.logger, self.operation, duration_ms, **self.extra)

        return False
