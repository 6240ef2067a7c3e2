"""Markdown command parsers for single-directory providers.

Claude Code, OpenCode and Factory Droid all keep one ``<name>.md`` file
per command in a flat directory. They differ only in which frontmatter
keys they write back.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..command import CommandRecord
from ..core.markdown import load_frontmatter, render_markdown, split_frontmatter
from ..util.log import Log
from .files import file_exists, list_files, read_text, write_text

log = Log.create({"service": "parser"})


class CommandParser(Protocol):
    """What the sync engine needs from a provider parser."""

    async def parse_all(self) -> Sequence[CommandRecord]: ...

    async def command_exists(self, name: str) -> bool: ...

    async def write_command(self, record: CommandRecord) -> str: ...


def strip_suffix(filename: str, suffix: str) -> str:
    if filename.endswith(suffix):
        return filename[: -len(suffix)]
    return filename


class MarkdownCommandParser:
    """Reads and writes ``<name><suffix>`` command files in one directory."""

    provider = "markdown"

    def __init__(self, directory: str, suffix: str = ".md") -> None:
        self.directory = directory
        self.suffix = suffix

    def path_for(self, name: str) -> str:
        return os.path.join(self.directory, f"{name}{self.suffix}")

    async def parse_all(self) -> List[CommandRecord]:
        """Parse every command file; files that do not parse are skipped."""
        records: List[CommandRecord] = []
        for filename in await list_files(self.directory, self.suffix):
            path = os.path.join(self.directory, filename)
            try:
                text = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                log.warn("cannot read command file", {"path": path, "error": e})
                continue
            record = self.parse_file(text, filename, os.path.abspath(path))
            if record is None:
                log.debug("skipped command file", {"provider": self.provider, "path": path})
                continue
            records.append(record)
        return records

    def parse_file(self, content: str, filename: str, path: str) -> Optional[CommandRecord]:
        """Build a record from file text.

        Returns None when the text has no delimited frontmatter block or
        the body is empty. Broken YAML gives an empty frontmatter mapping.
        """
        parts = split_frontmatter(content)
        if parts is None:
            return None

        front_text, body = parts
        body = body.strip()
        if not body:
            return None

        frontmatter = load_frontmatter(front_text)
        return CommandRecord(
            name=strip_suffix(filename, self.suffix),
            description=_description(frontmatter),
            content=body,
            frontmatter=frontmatter,
            source_path=path,
        )

    def frontmatter_for(self, record: CommandRecord) -> Dict[str, Any]:
        """Frontmatter keys this provider writes for ``record``."""
        return {"description": record.description}

    async def write_command(self, record: CommandRecord) -> str:
        """Write (overwrite) the command file and return its path."""
        path = self.path_for(record.name)
        await write_text(path, render_markdown(self.frontmatter_for(record), record.content))
        return path

    async def command_exists(self, name: str) -> bool:
        return await file_exists(self.path_for(name))


class ClaudeParser(MarkdownCommandParser):
    """Claude Code commands (``~/.claude/commands/<name>.md``)."""

    provider = "claude"


class OpencodeParser(MarkdownCommandParser):
    """OpenCode commands (``~/.config/opencode/commands/<name>.md``)."""

    provider = "opencode"


class DroidParser(MarkdownCommandParser):
    """Factory Droid commands; keeps ``argument-hint`` when present."""

    provider = "droid"

    def frontmatter_for(self, record: CommandRecord) -> Dict[str, Any]:
        frontmatter = super().frontmatter_for(record)
        hint = record.frontmatter.get("argument-hint")
        if hint:
            frontmatter["argument-hint"] = hint
        return frontmatter


def _description(frontmatter: Dict[str, Any]) -> str:
    value = frontmatter.get("description")
    if value is None:
        return ""
    return str(value)
