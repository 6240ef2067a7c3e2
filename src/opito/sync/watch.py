"""Watch mode: rerun a sync pass when source files change.

:class:`DirectoryWatcher` polls a directory tree and reports files that
were added or changed since the previous poll. :class:`WatchRunner`
owns the only loop that runs passes, so passes never overlap; changes
seen while a pass is running are folded into a single rerun.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Literal, Optional, Tuple

from ..util.log import Log
from .engine import SyncReport

log = Log.create({"service": "sync.watch"})

EventKind = Literal["add", "change"]

_Stamp = Tuple[int, int]


@dataclass(frozen=True)
class WatchEvent:
    kind: EventKind
    path: str


class DirectoryWatcher:
    """Poll a directory tree for added and modified files.

    The first snapshot is a baseline: files that already exist never
    produce events. Removals are not reported.

    Example:
        >>> watcher = DirectoryWatcher("~/.claude/commands")
        >>> watcher.start()
        >>> events = watcher.poll()
    """

    def __init__(self, path: str, interval: float = 1.0) -> None:
        self.path = path
        self.interval = interval
        self._snapshot: Optional[Dict[str, _Stamp]] = None

    def _scan(self) -> Dict[str, _Stamp]:
        snapshot: Dict[str, _Stamp] = {}
        if not os.path.isdir(self.path):
            return snapshot
        for root, _dirs, files in os.walk(self.path):
            for name in files:
                full = os.path.join(root, name)
                try:
                    stat = os.stat(full)
                except OSError:
                    # Removed between listing and stat.
                    continue
                snapshot[full] = (stat.st_mtime_ns, stat.st_size)
        return snapshot

    def start(self) -> None:
        """Take the baseline snapshot."""
        self._snapshot = self._scan()

    def poll(self) -> List[WatchEvent]:
        """Events since the previous poll (or since :meth:`start`)."""
        current = self._scan()
        if self._snapshot is None:
            self._snapshot = current
            return []

        events: List[WatchEvent] = []
        for path, stamp in current.items():
            previous = self._snapshot.get(path)
            if previous is None:
                events.append(WatchEvent("add", path))
            elif previous != stamp:
                events.append(WatchEvent("change", path))
        self._snapshot = current
        return events


class WatchRunner:
    """Runs one pass, then reruns it on file changes until stopped.

    Args:
        run_pass: Coroutine function performing one sync pass
        watcher: Watcher over the source directory
        on_report: Called with the report of every pass
    """

    def __init__(
        self,
        run_pass: Callable[[], Awaitable[SyncReport]],
        watcher: DirectoryWatcher,
        on_report: Optional[Callable[[SyncReport], None]] = None,
    ) -> None:
        self.run_pass = run_pass
        self.watcher = watcher
        self.on_report = on_report
        self.passes = 0
        self._stop = asyncio.Event()
        self._pending = False

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def request(self) -> None:
        """Ask for a rerun; several requests before the next pass collapse into one."""
        self._pending = True

    async def _run_once(self) -> None:
        report = await self.run_pass()
        self.passes += 1
        if self.on_report:
            self.on_report(report)

    async def run(self) -> None:
        """Block until :meth:`stop` is called."""
        self.watcher.start()
        await self._run_once()
        log.info("watching for changes", {"path": self.watcher.path})

        while not self._stop.is_set():
            events = await asyncio.to_thread(self.watcher.poll)
            if events:
                log.info("changes detected", {"count": len(events), "first": events[0].path})
                self.request()

            if self._pending and not self._stop.is_set():
                self._pending = False
                try:
                    await self._run_once()
                except Exception as e:
                    log.error("sync pass failed", {"error": e})

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.watcher.interval)
            except asyncio.TimeoutError:
                pass

        log.info("watch stopped", {"passes": self.passes})
