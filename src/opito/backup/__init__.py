"""Backup manager."""

from .manager import BackupEntry, BackupManager, backup_timestamp

__all__ = ["BackupEntry", "BackupManager", "backup_timestamp"]
