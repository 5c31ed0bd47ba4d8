"""
Fake Sass compiler for unit testing
"""

from sasswatch.domain.models import CompileResult


class FakeCompiler:
    """
    CompilerPort fake.

    Records every call; maps ``x.sass`` to ``x.css`` unless a fixed result is set.
    """

    def __init__(self, success: bool = True, events: list | None = None):
        self.success = success
        self.calls: list[list[str]] = []
        self.events = events if events is not None else []
        self.result: CompileResult | None = None

    def run(self, paths: list[str]) -> CompileResult:
        self.calls.append(list(paths))
        self.events.append(("compile", list(paths)))
        if self.result is not None:
            return self.result
        written = [p.rsplit(".", 1)[0] + ".css" for p in paths] if self.success else []
        return CompileResult(changed_files=written, success=self.success)
