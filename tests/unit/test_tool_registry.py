"""
ToolRegistry notification and watch-pattern matching
"""

from sasswatch.host import ToolRegistry
from sasswatch.ports import NotifierPort, ToolPort
from sasswatch.watching.watcher import Watcher, match_files
from tests.fakes import FakeTool


class TestMatchFiles:
    def test_keeps_order_and_matches_any_watcher(self):
        watchers = [Watcher(r"\.css$"), Watcher(r"^public/")]

        assert match_files(watchers, ["b.css", "a.js", "public/x.js", "a.css"]) == ["b.css", "public/x.js", "a.css"]

    def test_no_watchers_match_nothing(self):
        assert match_files([], ["a.css"]) == []

    def test_compiled_patterns_are_accepted(self):
        import re

        assert Watcher(re.compile(r"x")).match("x.css")


class TestToolRegistry:
    def test_each_tool_gets_its_subset(self):
        reload = FakeTool("livereload", r"\.css$")
        minify = FakeTool("minify", r"^css/app\.css$")
        registry = ToolRegistry([reload, minify])

        registry.notify(["css/app.css", "css/print.css"])

        assert reload.received == [["css/app.css", "css/print.css"]]
        assert minify.received == [["css/app.css"]]

    def test_tools_without_match_are_not_called(self):
        js = FakeTool("uglify", r"\.js$")
        registry = ToolRegistry([js])

        registry.notify(["css/app.css"])
        registry.notify([])

        assert js.received == []

    def test_register_is_idempotent_per_name(self):
        first = FakeTool("livereload", r"\.css$")
        second = FakeTool("livereload", r".*")
        registry = ToolRegistry([first])

        registry.register(second)

        assert registry.tools == [first]

    def test_unregister(self):
        tool = FakeTool("livereload", r"\.css$")
        registry = ToolRegistry([tool])

        registry.unregister("livereload")
        registry.notify(["a.css"])

        assert registry.tools == []
        assert tool.received == []

    def test_ports_are_satisfied(self):
        assert isinstance(ToolRegistry(), NotifierPort)
        assert isinstance(FakeTool("t", "x"), ToolPort)
