"""
Logging helpers
"""

from unittest.mock import MagicMock

import pytest

from sasswatch.errors import CompilationFailure
from sasswatch.observability import LogPerformance, log_error, log_performance


@pytest.fixture
def logger():
    return MagicMock()


def test_log_error_flattens_details(logger):
    error = CompilationFailure("Sass compilation failed", {"paths": ["styles/main.sass"]})

    log_error(logger, "build_pass_failed", error=error, trigger="batch")

    logger.error.assert_called_once_with(
        "build_pass_failed",
        trigger="batch",
        error_type="CompilationFailure",
        error_message="Sass compilation failed",
        paths=["styles/main.sass"],
    )


def test_log_error_plain_exception(logger):
    log_error(logger, "unexpected", error=ValueError("boom"))

    _, kwargs = logger.error.call_args
    assert kwargs == {"error_type": "ValueError", "error_message": "boom"}


def test_log_performance_fast_and_slow(logger):
    log_performance(logger, "sass_compile_pass", 12.345, files=2)
    log_performance(logger, "sass_compile_pass", 1500.0)

    logger.info.assert_called_once_with(
        "operation_complete", operation="sass_compile_pass", duration_ms=12.35, files=2
    )
    _, kwargs = logger.warning.call_args
    assert kwargs["slow"] is True


def test_log_performance_context_reports_failure(logger):
    with pytest.raises(CompilationFailure):
        with LogPerformance(logger, "sass_compile_pass", files=1):
            raise CompilationFailure("Sass compilation failed")

    event, kwargs = logger.error.call_args
    assert event == ("sass_compile_pass_failed",)
    assert kwargs["files"] == 1
    assert kwargs["error_type"] == "CompilationFailure"
    logger.info.assert_not_called()
