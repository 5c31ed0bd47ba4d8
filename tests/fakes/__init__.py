"""
Test Fakes Module

Minimal collaborator implementations satisfying the sasswatch ports.
"""

from tests.fakes.fake_compiler import FakeCompiler
from tests.fakes.fake_notifier import FakeNotifier, FakeTool

__all__ = [
    "FakeCompiler",
    "FakeNotifier",
    "FakeTool",
]
