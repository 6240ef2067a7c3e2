import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from opito.backup import BackupManager, backup_timestamp
from tests.helpers import snapshot, write_command


def test_backup_timestamp_is_a_folder_name() -> None:
    stamp = backup_timestamp(datetime(2024, 3, 5, 14, 7, 9, 123000, tzinfo=timezone.utc))

    assert stamp == "2024-03-05T14-07-09-123Z"


@pytest.mark.anyio
async def test_create_copies_markdown_files_verbatim(tmp_path: Path) -> None:
    source = tmp_path / "commands"
    write_command(source, "review", "Review")
    write_command(source, "commit", "Commit")
    (source / "notes.txt").write_text("skip me", encoding="utf-8")
    (source / "nested.md").mkdir()
    manager = BackupManager(str(tmp_path / "backups"))

    backup_path = await manager.create(str(source))

    assert backup_path is not None
    assert Path(backup_path).name.startswith("backup-")
    copied = snapshot(Path(backup_path))
    assert copied == {
        "commit.md": (source / "commit.md").read_bytes(),
        "review.md": (source / "review.md").read_bytes(),
    }


@pytest.mark.anyio
async def test_create_without_source_does_nothing(tmp_path: Path) -> None:
    manager = BackupManager(str(tmp_path / "backups"))

    assert await manager.create(str(tmp_path / "missing")) is None
    assert not (tmp_path / "backups").exists()


@pytest.mark.anyio
async def test_create_twice_in_one_instant_gets_distinct_folders(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("opito.backup.manager.backup_timestamp", lambda: "2024-01-01T00-00-00-000Z")
    source = tmp_path / "commands"
    write_command(source, "review", "Review")
    manager = BackupManager(str(tmp_path / "backups"))

    first = await manager.create(str(source))
    second = await manager.create(str(source))

    assert first != second
    assert Path(second).name == "backup-2024-01-01T00-00-00-000Z-1"  # type: ignore[arg-type]


@pytest.mark.anyio
async def test_create_keeps_only_newest_backups(tmp_path: Path) -> None:
    root = tmp_path / "backups"
    for i in range(12):
        old = root / f"backup-old-{i:02d}"
        old.mkdir(parents=True)
        os.utime(old, (1_700_000_000 + i, 1_700_000_000 + i))
    source = tmp_path / "commands"
    write_command(source, "review", "Review")
    manager = BackupManager(str(root), max_backups=10)

    backup_path = await manager.create(str(source))

    names = {entry.name for entry in root.iterdir()}
    assert len(names) == 10
    assert Path(backup_path).name in names  # type: ignore[arg-type]
    assert {"backup-old-00", "backup-old-01", "backup-old-02"}.isdisjoint(names)
    assert "backup-old-11" in names
    assert manager.cleanup_errors == []


def test_cleanup_reports_removed_paths(tmp_path: Path) -> None:
    root = tmp_path / "backups"
    for i in range(3):
        entry = root / f"backup-{i}"
        entry.mkdir(parents=True)
        os.utime(entry, (1_700_000_000 + i, 1_700_000_000 + i))

    removed = BackupManager(str(root), max_backups=1).cleanup()

    assert sorted(Path(p).name for p in removed) == ["backup-0", "backup-1"]
    assert [p.name for p in root.iterdir()] == ["backup-2"]


def test_cleanup_collects_errors_without_raising(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path / "backups"
    for i in range(2):
        entry = root / f"backup-{i}"
        entry.mkdir(parents=True)
        os.utime(entry, (1_700_000_000 + i, 1_700_000_000 + i))

    def refuse(path) -> None:  # type: ignore[no-untyped-def]
        raise PermissionError("locked")

    monkeypatch.setattr("opito.backup.manager.shutil.rmtree", refuse)
    manager = BackupManager(str(root), max_backups=1)

    assert manager.cleanup() == []
    assert len(manager.cleanup_errors) == 1
    assert "backup-0" in manager.cleanup_errors[0]


def test_list_is_newest_first(tmp_path: Path) -> None:
    root = tmp_path / "backups"
    for i, name in enumerate(["backup-b", "backup-a", "backup-c"]):
        entry = root / name
        entry.mkdir(parents=True)
        os.utime(entry, (1_700_000_000 + i, 1_700_000_000 + i))

    entries = BackupManager(str(root)).list()

    assert [entry.name for entry in entries] == ["backup-c", "backup-a", "backup-b"]
    assert entries[0].date == datetime.fromtimestamp(1_700_000_002, tz=timezone.utc)
    assert BackupManager(str(tmp_path / "none")).list() == []
