import asyncio
from pathlib import Path
from typing import List

import pytest

from opito.sync import DirectoryWatcher, SyncReport, WatchEvent, WatchRunner
from tests.helpers import write_command


async def wait_for_passes(runner: WatchRunner, count: int) -> None:
    while runner.passes < count:
        await asyncio.sleep(0.01)


def test_watcher_ignores_baseline_and_reports_changes(tmp_path: Path) -> None:
    existing = write_command(tmp_path, "a", "A")
    watcher = DirectoryWatcher(str(tmp_path), interval=0.01)
    watcher.start()

    assert watcher.poll() == []

    added = write_command(tmp_path / "nested", "b", "B")
    assert watcher.poll() == [WatchEvent("add", str(added))]

    existing.write_text(existing.read_text(encoding="utf-8") + "More\n", encoding="utf-8")
    assert watcher.poll() == [WatchEvent("change", str(existing))]

    added.unlink()
    assert watcher.poll() == []


def test_watcher_on_missing_directory(tmp_path: Path) -> None:
    watcher = DirectoryWatcher(str(tmp_path / "later"))
    watcher.start()

    created = write_command(tmp_path / "later", "a", "A")

    assert watcher.poll() == [WatchEvent("add", str(created))]


@pytest.mark.anyio
async def test_runner_reruns_when_a_file_is_added(tmp_path: Path) -> None:
    write_command(tmp_path, "a", "A")
    reports: List[SyncReport] = []

    async def run_pass() -> SyncReport:
        return SyncReport(total=len(list(tmp_path.glob("*.md"))))

    runner = WatchRunner(run_pass, DirectoryWatcher(str(tmp_path), interval=0.01), reports.append)

    async def drive() -> None:
        await wait_for_passes(runner, 1)
        await asyncio.sleep(0.05)
        assert runner.passes == 1

        write_command(tmp_path, "b", "B")
        await wait_for_passes(runner, 2)
        runner.stop()

    await asyncio.wait_for(asyncio.gather(runner.run(), drive()), timeout=5)

    assert runner.stopped is True
    assert [report.total for report in reports] == [1, 2]


@pytest.mark.anyio
async def test_runner_coalesces_requests_into_one_pass(tmp_path: Path) -> None:
    active = 0
    max_active = 0

    async def run_pass() -> SyncReport:
        nonlocal active, max_active
        active += 1
        max_active = max(max_active, active)
        if runner.passes == 0:
            runner.request()
            runner.request()
            runner.request()
        await asyncio.sleep(0.02)
        active -= 1
        return SyncReport()

    runner = WatchRunner(run_pass, DirectoryWatcher(str(tmp_path), interval=0.01))

    async def drive() -> None:
        await wait_for_passes(runner, 2)
        await asyncio.sleep(0.1)
        runner.stop()

    await asyncio.wait_for(asyncio.gather(runner.run(), drive()), timeout=5)

    assert runner.passes == 2
    assert max_active == 1


@pytest.mark.anyio
async def test_runner_survives_a_failing_rerun(tmp_path: Path) -> None:
    calls = 0

    async def run_pass() -> SyncReport:
        nonlocal calls
        calls += 1
        if calls == 2:
            raise RuntimeError("boom")
        return SyncReport()

    runner = WatchRunner(run_pass, DirectoryWatcher(str(tmp_path), interval=0.01))

    async def drive() -> None:
        await wait_for_passes(runner, 1)
        runner.request()
        while calls < 2:
            await asyncio.sleep(0.01)
        runner.request()
        await wait_for_passes(runner, 2)
        runner.stop()

    await asyncio.wait_for(asyncio.gather(runner.run(), drive()), timeout=5)

    assert calls == 3
    assert runner.passes == 2
