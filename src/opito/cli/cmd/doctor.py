"""``opito doctor`` - check that provider directories and config are usable."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ...core.config_schema import Config
from ...parser import ClaudeParser, CopilotParser, OpencodeParser
from ...provider import ProviderId, Scope, resolve_paths


@dataclass
class Check:
    name: str
    path: str
    passed: bool
    required: bool = True


def backup_writable(path: str) -> bool:
    """True when ``path`` exists as a writable directory or could be created.

    A missing directory is judged by its nearest existing ancestor.
    """
    current = Path(path)
    while not current.exists() and current != current.parent:
        current = current.parent
    return current.is_dir() and os.access(current, os.W_OK)


def directory_checks(config: Config, cwd: Optional[str] = None) -> List[Check]:
    copilot = resolve_paths(ProviderId.COPILOT, Scope.GLOBAL, config, cwd)
    return [
        Check("Claude commands directory", config.claude.commands_path, os.path.isdir(config.claude.commands_path)),
        Check("OpenCode commands directory", config.opencode.commands_path, os.path.isdir(config.opencode.commands_path)),
        Check("Droid commands directory", config.droid.commands_path, os.path.isdir(config.droid.commands_path), required=False),
        Check("Backup directory", config.backup.path, backup_writable(config.backup.path), required=config.backup.enabled),
        Check("Copilot prompts directory", copilot.prompts or "", os.path.isdir(copilot.prompts or ""), required=False),
        Check("Copilot instructions directory", copilot.instructions or "", os.path.isdir(copilot.instructions or ""), required=False),
        Check("Copilot agents directory", copilot.agents or "", os.path.isdir(copilot.agents or ""), required=False),
    ]


async def _count(config: Config, console: Console, cwd: Optional[str]) -> bool:
    problems = False
    if os.path.isdir(config.claude.commands_path):
        commands = await ClaudeParser(config.claude.commands_path).parse_all()
        console.print(f"Claude commands: {len(commands)} found")
        missing = [c for c in commands if not c.description]
        if missing:
            console.print(f"[yellow]Commands without description: {len(missing)}[/yellow]")
            problems = True

    if os.path.isdir(config.opencode.commands_path):
        commands = await OpencodeParser(config.opencode.commands_path).parse_all()
        console.print(f"OpenCode commands: {len(commands)} found")

    paths = resolve_paths(ProviderId.COPILOT, Scope.GLOBAL, config, cwd)
    if paths.prompts and os.path.isdir(paths.prompts):
        parser = CopilotParser(paths.prompts, paths.instructions or "", paths.agents or "")
        console.print(f"Copilot prompts: {len(await parser.parse_prompts())} found")
        console.print(f"Copilot instructions: {len(await parser.parse_instructions())} found")
        console.print(f"Copilot agents: {len(await parser.parse_agents())} found")
    return problems


def doctor_command(config: Config, console: Optional[Console] = None, cwd: Optional[str] = None) -> int:
    """Print diagnostics; returns 1 when a required check fails."""
    console = console or Console()
    console.print("\n[bold]Running diagnostics...[/bold]\n")

    failed = False
    for check in directory_checks(config, cwd):
        if check.passed:
            console.print(f"[green]✓ {check.name}[/green]")
        elif check.required:
            console.print(f"[red]✗ {check.name}[/red]")
            failed = True
        else:
            console.print(f"[yellow]- {check.name} (not found)[/yellow]")
        console.print(f"  [dim]{check.path}[/dim]")

    console.print()
    if asyncio.run(_count(config, console, cwd)):
        failed = True
    console.print()

    if failed:
        console.print('[red]Some diagnostics failed. Run "opito init" to set up your environment.[/red]')
        return 1
    console.print("[green]All diagnostics passed![/green]")
    return 0
