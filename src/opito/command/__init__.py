"""Command Record data model."""

from .record import CommandKind, CommandRecord, CopilotCommandRecord

__all__ = ["CommandKind", "CommandRecord", "CopilotCommandRecord"]
