"""
WatchHost: batches reach the guard and failed passes do not stop watching
"""

import pytest

from sasswatch.config.groups import WatcherConfig
from sasswatch.domain.models import ChangeBatch
from sasswatch.service import WatchHost


@pytest.fixture
def host(make_guard):
    def _make(**options) -> WatchHost:
        return WatchHost(make_guard(**options), WatcherConfig(debounce_ms=50))

    return _make


@pytest.mark.asyncio
async def test_changed_files_are_compiled_sorted(host, compiler, notifier):
    watch_host = host(input="styles")

    await watch_host.handle_batch(ChangeBatch(changed={"styles/b.sass", "styles/a.sass"}))

    assert compiler.calls == [["styles/a.sass", "styles/b.sass"]]
    assert notifier.calls == [["styles/a.css", "styles/b.css"]]


@pytest.mark.asyncio
async def test_removals_compile_nothing(host, compiler):
    watch_host = host(input="styles")

    await watch_host.handle_batch(ChangeBatch(removed={"styles/main.sass"}))

    assert compiler.calls == []


@pytest.mark.asyncio
async def test_failed_pass_is_counted_and_next_batch_runs(host, compiler, notifier):
    watch_host = host(input="styles")
    compiler.success = False

    await watch_host.handle_batch(ChangeBatch(changed={"styles/main.sass"}))

    compiler.success = True
    await watch_host.handle_batch(ChangeBatch(changed={"styles/main.sass"}))

    assert watch_host.failed_passes == 1
    assert len(compiler.calls) == 2
    assert notifier.calls == [["styles/main.css"]]


@pytest.mark.asyncio
async def test_resolution_failure_does_not_escape(tree, host, compiler):
    tree({"styles/_alpha.sass": '@import "beta"', "styles/_beta.sass": '@import "alpha"'})
    watch_host = host(input="styles", smart_partials=True)

    await watch_host.handle_batch(ChangeBatch(changed={"styles/_alpha.sass"}))

    assert watch_host.failed_passes == 1
    assert compiler.calls == []


@pytest.mark.asyncio
async def test_start_runs_all_on_start_and_stop_releases_wait(tree, host, compiler):
    tree({"styles/main.sass": ""})
    watch_host = host(input="styles", all_on_start=True)

    await watch_host.start()
    try:
        assert watch_host.file_watcher.is_running
        assert compiler.calls == [["styles/main.sass"]]
    finally:
        await watch_host.stop()

    await watch_host.wait()
    assert not watch_host.file_watcher.is_running
