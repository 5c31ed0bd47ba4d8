"""
Global test configuration and fixtures
"""

from pathlib import Path

import pytest

from sasswatch.config.groups import SassOptions
from sasswatch.guard import SassGuard
from sasswatch.infrastructure.source_tree import SourceTree
from tests.fakes import FakeCompiler, FakeNotifier


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def tree(tmp_path):
    """Writer bound to a temporary working root."""

    def _write(files: dict[str, str]) -> Path:
        return write_tree(tmp_path, files)

    return _write


@pytest.fixture
def events() -> list:
    """Shared call log for ordering assertions."""
    return []


@pytest.fixture
def compiler(events) -> FakeCompiler:
    return FakeCompiler(events=events)


@pytest.fixture
def notifier(events) -> FakeNotifier:
    return FakeNotifier(events=events)


@pytest.fixture
def make_guard(tmp_path, compiler, notifier):
    """SassGuard over tmp_path with fake compiler and notifier."""

    def _make(**options) -> SassGuard:
        watchers = options.pop("watchers", None)
        return SassGuard(
            watchers=watchers,
            options=SassOptions(**options),
            runner=compiler,
            notifier=notifier,
            source_tree=SourceTree(tmp_path),
        )

    return _make


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (filesystem, event loop)")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
