"""Sync engine: one pass from a source provider to a target provider.

A pass reads every source command, applies the optional name filter,
backs up the target directory, then converts and writes each command
in turn. A failing command is recorded and the pass moves on; the
caller decides what an error in the report means for the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set

from ..backup import BackupManager
from ..command import CommandRecord, CopilotCommandRecord
from ..convert import Converter
from ..core.config_schema import Config
from ..parser import CommandParser
from ..provider import (
    ProviderId,
    Scope,
    create_converter,
    create_parser,
    ensure_enabled,
    resolve_paths,
    validate_sync_pair,
)
from ..util.error import describe_error
from ..util.log import Log

log = Log.create({"service": "sync"})


class SyncAction(str, Enum):
    """Outcome of one command in a pass."""
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class SyncOptions:
    """Options for a sync pass.

    Attributes:
        dry_run: Classify only; write nothing and take no backup
        force: Overwrite without taking a backup
        filter: Command names to sync; empty or None means all
    """
    dry_run: bool = False
    force: bool = False
    filter: Optional[Sequence[str]] = None


@dataclass
class SyncResult:
    success: bool
    command: str
    action: SyncAction
    error: Optional[str] = None


@dataclass
class SyncReport:
    """Aggregate outcome of a pass."""
    total: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    results: List[SyncResult] = field(default_factory=list)
    backup_path: Optional[str] = None

    @classmethod
    def from_results(cls, results: Iterable[SyncResult], backup_path: Optional[str] = None) -> "SyncReport":
        items = list(results)

        def count(action: SyncAction) -> int:
            return sum(1 for r in items if r.action == action)

        return cls(
            total=len(items),
            created=count(SyncAction.CREATED),
            updated=count(SyncAction.UPDATED),
            skipped=count(SyncAction.SKIPPED),
            errors=count(SyncAction.ERROR),
            results=items,
            backup_path=backup_path,
        )

    @property
    def failed(self) -> bool:
        """True when any command failed; the run as a whole counts as failed."""
        return self.errors > 0


def filter_commands(commands: Sequence[CommandRecord], names: Optional[Sequence[str]]) -> List[CommandRecord]:
    if not names:
        return list(commands)
    wanted = set(names)
    return [cmd for cmd in commands if cmd.name in wanted]


class SyncEngine:
    """Runs sync passes between one source parser and one target parser."""

    def __init__(
        self,
        source: CommandParser,
        target: CommandParser,
        converter: Optional[Converter] = None,
        backup_manager: Optional[BackupManager] = None,
        target_directory: Optional[str] = None,
    ) -> None:
        self.source = source
        self.target = target
        self.converter = converter
        self.backup_manager = backup_manager
        self.target_directory = target_directory

    @classmethod
    def for_providers(
        cls,
        config: Config,
        source: str | ProviderId,
        target: str | ProviderId,
        scope: str | Scope = Scope.GLOBAL,
        cwd: Optional[str] = None,
    ) -> "SyncEngine":
        """Build an engine for a provider pair.

        Raises the registry's pre-flight errors for bad identifiers, a
        source equal to the target or a disabled provider, before
        touching the filesystem.
        """
        source_id, target_id, scope_value = validate_sync_pair(source, target, scope)
        ensure_enabled(config, source_id, target_id)
        source_paths = resolve_paths(source_id, scope_value, config, cwd)
        target_paths = resolve_paths(target_id, scope_value, config, cwd)

        backup_manager = None
        if config.backup.enabled:
            backup_manager = BackupManager(config.backup.path, config.backup.max_backups)

        return cls(
            source=create_parser(source_id, source_paths),
            target=create_parser(target_id, target_paths),
            converter=create_converter(source_id, target_id),
            backup_manager=backup_manager,
            target_directory=target_paths.commands,
        )

    async def sync(self, options: Optional[SyncOptions] = None) -> SyncReport:
        """Run one pass and return its report."""
        options = options or SyncOptions()

        commands = filter_commands(await self.source.parse_all(), options.filter)
        log.info("commands to sync", {"count": len(commands), "dry_run": options.dry_run})

        backup_path = await self._backup(options)

        results: List[SyncResult] = []
        seen: Set[str] = set()
        for command in commands:
            result = await self.sync_command(command, options, seen)
            results.append(result)
            if result.action == SyncAction.ERROR:
                log.error("command failed", {"command": result.command, "error": result.error})
            else:
                log.info("command synced", {"command": result.command, "action": result.action.value})

        report = SyncReport.from_results(results, backup_path)
        log.info(
            "sync finished",
            {
                "total": report.total,
                "created": report.created,
                "updated": report.updated,
                "errors": report.errors,
            },
        )
        return report

    async def _backup(self, options: SyncOptions) -> Optional[str]:
        if options.dry_run or options.force:
            return None
        if self.backup_manager is None or not self.target_directory:
            return None
        return await self.backup_manager.create(self.target_directory)

    async def sync_command(
        self,
        command: CommandRecord,
        options: SyncOptions,
        seen: Optional[Set[str]] = None,
    ) -> SyncResult:
        """Convert, classify and (unless dry-run) write a single command.

        ``seen`` holds the target names already handled in this pass. A
        second source file mapping to one of them is an error in both
        dry-run and real mode, so it never overwrites the first.
        """
        try:
            converted = self.converter.convert(command) if self.converter else command
            if seen is not None:
                if converted.name in seen:
                    return SyncResult(
                        success=False,
                        command=command.name,
                        action=SyncAction.ERROR,
                        error=_duplicate_message(command),
                    )
                seen.add(converted.name)
            exists = await self.target.command_exists(converted.name)
            action = SyncAction.UPDATED if exists else SyncAction.CREATED
            if not options.dry_run:
                await self.target.write_command(converted)
        except Exception as e:
            return SyncResult(
                success=False,
                command=command.name,
                action=SyncAction.ERROR,
                error=describe_error(e),
            )
        return SyncResult(success=True, command=converted.name, action=action)


def _duplicate_message(command: CommandRecord) -> str:
    source = f" ({command.kind})" if isinstance(command, CopilotCommandRecord) else ""
    return f"Duplicate command name {command.name!r}{source}: another source file already maps to it"
