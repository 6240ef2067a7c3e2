"""Sync engine, watch mode and provider diff."""

from .diff import CommandDiff, DiffEntry, diff_command, diff_commands
from .engine import SyncAction, SyncEngine, SyncOptions, SyncReport, SyncResult, filter_commands
from .watch import DirectoryWatcher, WatchEvent, WatchRunner

__all__ = [
    "CommandDiff",
    "DiffEntry",
    "DirectoryWatcher",
    "SyncAction",
    "SyncEngine",
    "SyncOptions",
    "SyncReport",
    "SyncResult",
    "WatchEvent",
    "WatchRunner",
    "diff_command",
    "diff_commands",
    "filter_commands",
]
