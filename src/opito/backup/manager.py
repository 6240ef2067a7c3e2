"""Snapshots of a target directory taken before a sync overwrites it.

Each snapshot is a ``backup-<timestamp>`` folder under the backup root
holding verbatim copies of the directory's markdown files. Only the
newest ``max_backups`` snapshots are kept.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..util.log import Log

log = Log.create({"service": "backup"})


@dataclass
class BackupEntry:
    """An existing backup folder."""
    name: str
    date: datetime
    path: str


def backup_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with ``:`` and ``.`` replaced so it is a valid folder name."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return re.sub(r"[:.]", "-", iso)


class BackupManager:
    """Creates, prunes and lists backups under one root directory."""

    def __init__(self, backup_dir: str, max_backups: int = 10) -> None:
        self.backup_dir = backup_dir
        self.max_backups = max_backups
        self.cleanup_errors: List[str] = []

    async def create(self, source_dir: str) -> Optional[str]:
        """Copy every ``*.md`` file of ``source_dir`` into a new backup folder.

        Returns the new folder, or None when ``source_dir`` does not
        exist (there is nothing to protect).
        """
        if not Path(source_dir).is_dir():
            return None

        backup_path = await asyncio.to_thread(self._copy, Path(source_dir))
        await asyncio.to_thread(self.cleanup)
        log.info("backup created", {"source": source_dir, "path": backup_path})
        return backup_path

    def _copy(self, source: Path) -> str:
        root = Path(self.backup_dir)
        root.mkdir(parents=True, exist_ok=True)

        base = f"backup-{backup_timestamp()}"
        target = root / base
        index = 1
        while target.exists():
            target = root / f"{base}-{index}"
            index += 1
        target.mkdir()

        copied = 0
        for file in source.iterdir():
            if file.name.endswith(".md") and file.is_file():
                shutil.copy2(file, target / file.name)
                copied += 1
        log.debug("backup files copied", {"path": str(target), "count": copied})
        return str(target)

    def cleanup(self) -> List[str]:
        """Remove the oldest entries beyond ``max_backups``.

        Removal failures are logged and collected in ``cleanup_errors``;
        they never propagate. Returns the removed paths.
        """
        root = Path(self.backup_dir)
        if not root.is_dir():
            return []

        entries = sorted(root.iterdir(), key=lambda p: p.stat().st_mtime, reverse=True)
        removed: List[str] = []
        for stale in entries[self.max_backups:]:
            try:
                if stale.is_dir() and not stale.is_symlink():
                    shutil.rmtree(stale)
                else:
                    stale.unlink()
            except OSError as e:
                message = f"Failed to remove old backup {stale}: {e}"
                self.cleanup_errors.append(message)
                log.warn("failed to remove old backup", {"path": str(stale), "error": e})
                continue
            removed.append(str(stale))

        if removed:
            log.debug("old backups removed", {"count": len(removed)})
        return removed

    def list(self) -> List[BackupEntry]:
        """Existing backups, newest first."""
        root = Path(self.backup_dir)
        if not root.is_dir():
            return []

        entries = []
        for entry in root.iterdir():
            mtime = entry.stat().st_mtime
            entries.append(
                BackupEntry(
                    name=entry.name,
                    date=datetime.fromtimestamp(mtime, tz=timezone.utc),
                    path=str(entry),
                )
            )
        return sorted(entries, key=lambda e: e.date, reverse=True)
