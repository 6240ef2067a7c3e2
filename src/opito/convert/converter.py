"""Converters between provider dialects.

A converter is chosen per provider pair and applied to every record of
a sync pass. Crossing a converter narrows ``frontmatter`` to the keys
the target dialect understands; other keys are dropped on purpose.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from ..command import CommandRecord, CopilotCommandRecord

Direction = Literal["to", "from"]


def _hint(record: CommandRecord) -> Optional[str]:
    if isinstance(record, CopilotCommandRecord) and record.argument_hint:
        return record.argument_hint
    value = record.frontmatter.get("argument-hint")
    return str(value) if value else None


class Converter:
    """Claude <-> OpenCode: same fields, frontmatter reduced to ``description``."""

    def convert(self, record: CommandRecord) -> CommandRecord:
        return CommandRecord(
            name=record.name,
            description=record.description,
            content=record.content,
            frontmatter={"description": record.description},
            source_path=record.source_path,
        )


class CopilotConverter(Converter):
    """Maps records into and out of the Copilot dialect."""

    def __init__(self, direction: Direction = "to") -> None:
        self.direction = direction

    def convert(self, record: CommandRecord) -> CommandRecord:
        if self.direction == "to":
            return self.to_copilot(record)
        return self.from_copilot(record)

    def to_copilot(self, record: CommandRecord) -> CopilotCommandRecord:
        """Build a Copilot prompt, lifting extended fields out of the source frontmatter."""
        frontmatter = record.frontmatter
        tools = frontmatter.get("tools")
        tool_list: Optional[List[str]] = None
        if isinstance(tools, (list, tuple)):
            tool_list = [str(tool) for tool in tools] or None

        agent = frontmatter.get("agent")
        model = frontmatter.get("model")
        return CopilotCommandRecord(
            name=record.name,
            description=record.description,
            content=record.content,
            frontmatter={"description": record.description},
            source_path=record.source_path,
            kind="prompt",
            agent=str(agent) if agent else None,
            model=str(model) if model else None,
            tools=tool_list,
            argument_hint=_hint(record),
        )

    def from_copilot(self, record: CommandRecord) -> CommandRecord:
        """Reduce a Copilot record to the fields Claude/OpenCode/Droid keep."""
        frontmatter: Dict[str, Any] = {"description": record.description}
        hint = _hint(record)
        if hint:
            frontmatter["argument-hint"] = hint
        return CommandRecord(
            name=record.name,
            description=record.description,
            content=record.content,
            frontmatter=frontmatter,
            source_path=record.source_path,
        )

    def merge_copilot_settings(
        self,
        record: CommandRecord,
        *,
        agent: Optional[str] = None,
        model: Optional[str] = None,
        tools: Optional[List[str]] = None,
        argument_hint: Optional[str] = None,
    ) -> CopilotCommandRecord:
        """Convert ``record`` and overlay the given Copilot settings.

        The input record is left untouched.
        """
        settings: Dict[str, Any] = {
            key: value
            for key, value in {
                "agent": agent,
                "model": model,
                "tools": list(tools) if tools is not None else None,
                "argument_hint": argument_hint,
            }.items()
            if value is not None
        }
        return self.to_copilot(record).model_copy(update=settings)


class DroidConverter(Converter):
    """Maps records into and out of the Factory Droid dialect."""

    def __init__(self, direction: Direction = "to") -> None:
        self.direction = direction

    def convert(self, record: CommandRecord) -> CommandRecord:
        if self.direction == "to":
            return self.to_droid(record)
        return self.from_droid(record)

    def to_droid(self, record: CommandRecord) -> CommandRecord:
        """Droid understands ``argument-hint``, so it is carried across."""
        frontmatter: Dict[str, Any] = {"description": record.description}
        hint = _hint(record)
        if hint:
            frontmatter["argument-hint"] = hint
        return CommandRecord(
            name=record.name,
            description=record.description,
            content=record.content,
            frontmatter=frontmatter,
            source_path=record.source_path,
        )

    def from_droid(self, record: CommandRecord) -> CommandRecord:
        return super().convert(record)
