"""VS Code Copilot parser.

Copilot keeps three kinds of markdown artifacts, each in its own
directory with its own suffix::

    .github/prompts/<name>.prompt.md
    .github/prompts/instructions/<name>.instructions.md
    .github/prompts/agents/<name>.agent.md

Besides ``description`` the frontmatter may carry ``agent``, ``model``,
``tools`` and ``argument-hint``. Each kind writes back its own subset of
those (see ``WRITTEN_FIELDS``), and only the ones that are set.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from ..command import CommandKind, CommandRecord, CopilotCommandRecord
from ..core.markdown import load_frontmatter, render_markdown, split_frontmatter
from ..util.log import Log
from .files import file_exists, list_files, read_text, write_text
from .markdown import strip_suffix

log = Log.create({"service": "parser.copilot"})

SUFFIXES: Dict[str, str] = {
    "prompt": ".prompt.md",
    "instruction": ".instructions.md",
    "agent": ".agent.md",
}

WRITTEN_FIELDS: Dict[str, Tuple[str, ...]] = {
    "prompt": ("agent", "model", "tools", "argument-hint"),
    "instruction": ("agent",),
    "agent": ("agent", "model", "tools"),
}


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _tools(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [value] if value else None
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return None


class CopilotParser:
    """Reads and writes Copilot prompts, instructions and agents."""

    provider = "copilot"

    def __init__(self, prompts_path: str, instructions_path: str, agents_path: str) -> None:
        self.directories: Dict[str, str] = {
            "prompt": prompts_path,
            "instruction": instructions_path,
            "agent": agents_path,
        }

    @property
    def prompts_path(self) -> str:
        return self.directories["prompt"]

    def path_for(self, name: str, kind: CommandKind = "prompt") -> str:
        return os.path.join(self.directories[kind], f"{name}{SUFFIXES[kind]}")

    async def parse_all(self) -> List[CopilotCommandRecord]:
        """Prompts, then instructions, then agents."""
        return [
            *await self.parse_prompts(),
            *await self.parse_instructions(),
            *await self.parse_agents(),
        ]

    async def parse_prompts(self) -> List[CopilotCommandRecord]:
        return await self._parse_kind("prompt")

    async def parse_instructions(self) -> List[CopilotCommandRecord]:
        return await self._parse_kind("instruction")

    async def parse_agents(self) -> List[CopilotCommandRecord]:
        return await self._parse_kind("agent")

    async def _parse_kind(self, kind: CommandKind) -> List[CopilotCommandRecord]:
        directory = self.directories[kind]
        records: List[CopilotCommandRecord] = []
        try:
            filenames = await list_files(directory, SUFFIXES[kind])
        except OSError as e:
            log.warn("cannot list copilot directory", {"kind": kind, "directory": directory, "error": e})
            return records

        for filename in filenames:
            path = os.path.join(directory, filename)
            try:
                text = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                log.warn("cannot read copilot file", {"path": path, "error": e})
                continue
            record = self.parse_file(text, filename, os.path.abspath(path), kind)
            if record is not None:
                records.append(record)
        return records

    def parse_file(
        self,
        content: str,
        filename: str,
        path: str,
        kind: CommandKind = "prompt",
    ) -> Optional[CopilotCommandRecord]:
        """Build a Copilot record from file text, or None if it does not parse."""
        parts = split_frontmatter(content)
        if parts is None:
            return None

        front_text, body = parts
        body = body.strip()
        if not body:
            return None

        frontmatter = load_frontmatter(front_text)
        description = frontmatter.get("description")
        return CopilotCommandRecord(
            name=strip_suffix(filename, SUFFIXES[kind]),
            description="" if description is None else str(description),
            content=body,
            frontmatter=frontmatter,
            source_path=path,
            kind=kind,
            agent=_optional_str(frontmatter.get("agent")),
            model=_optional_str(frontmatter.get("model")),
            tools=_tools(frontmatter.get("tools")),
            argument_hint=_optional_str(frontmatter.get("argument-hint")),
        )

    @staticmethod
    def frontmatter_for(record: CommandRecord, kind: CommandKind = "prompt") -> Dict[str, Any]:
        """``description`` plus the set extended fields that ``kind`` writes."""
        frontmatter: Dict[str, Any] = {"description": record.description}
        if not isinstance(record, CopilotCommandRecord):
            return frontmatter
        values: Dict[str, Any] = {
            "agent": record.agent,
            "model": record.model,
            "tools": list(record.tools) if record.tools else None,
            "argument-hint": record.argument_hint,
        }
        for key in WRITTEN_FIELDS[kind]:
            if values[key]:
                frontmatter[key] = values[key]
        return frontmatter

    async def _write(self, record: CommandRecord, kind: CommandKind) -> str:
        path = self.path_for(record.name, kind)
        await write_text(path, render_markdown(self.frontmatter_for(record, kind), record.content))
        log.debug("wrote copilot file", {"kind": kind, "path": path})
        return path

    async def write_prompt(self, record: CommandRecord) -> str:
        return await self._write(record, "prompt")

    async def write_instruction(self, record: CommandRecord) -> str:
        return await self._write(record, "instruction")

    async def write_agent(self, record: CommandRecord) -> str:
        return await self._write(record, "agent")

    async def write_command(self, record: CommandRecord) -> str:
        """Write a record as its own kind; plain records become prompts."""
        kind: CommandKind = record.kind if isinstance(record, CopilotCommandRecord) else "prompt"
        return await self._write(record, kind)

    async def prompt_exists(self, name: str) -> bool:
        return await file_exists(self.path_for(name, "prompt"))

    async def instruction_exists(self, name: str) -> bool:
        return await file_exists(self.path_for(name, "instruction"))

    async def agent_exists(self, name: str) -> bool:
        return await file_exists(self.path_for(name, "agent"))

    async def command_exists(self, name: str, kind: CommandKind = "prompt") -> bool:
        return await file_exists(self.path_for(name, kind))
