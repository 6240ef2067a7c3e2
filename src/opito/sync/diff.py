"""Compare the commands of two providers by name, description and body."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence

from ..command import CommandRecord

DiffStatus = Literal["source-only", "target-only", "different"]


@dataclass
class DiffEntry:
    name: str
    status: DiffStatus


@dataclass
class CommandDiff:
    """Side-by-side view of one command."""
    name: str
    source: Optional[CommandRecord]
    target: Optional[CommandRecord]

    @property
    def in_source(self) -> bool:
        return self.source is not None

    @property
    def in_target(self) -> bool:
        return self.target is not None

    @property
    def description_matches(self) -> bool:
        return bool(self.source and self.target and self.source.description == self.target.description)

    @property
    def content_matches(self) -> bool:
        return bool(self.source and self.target and self.source.content == self.target.content)

    @property
    def identical(self) -> bool:
        return self.description_matches and self.content_matches


def _by_name(records: Sequence[CommandRecord]) -> Dict[str, CommandRecord]:
    return {record.name: record for record in records}


def diff_commands(
    source: Sequence[CommandRecord],
    target: Sequence[CommandRecord],
) -> List[DiffEntry]:
    """Commands that are missing on one side or differ; identical ones are left out.

    Source names come first in source order, then target-only names.
    """
    source_map = _by_name(source)
    target_map = _by_name(target)

    entries: List[DiffEntry] = []
    for name, record in source_map.items():
        other = target_map.get(name)
        if other is None:
            entries.append(DiffEntry(name, "source-only"))
        elif record.content != other.content or record.description != other.description:
            entries.append(DiffEntry(name, "different"))

    for name in target_map:
        if name not in source_map:
            entries.append(DiffEntry(name, "target-only"))
    return entries


def diff_command(
    name: str,
    source: Sequence[CommandRecord],
    target: Sequence[CommandRecord],
) -> CommandDiff:
    return CommandDiff(name=name, source=_by_name(source).get(name), target=_by_name(target).get(name))
