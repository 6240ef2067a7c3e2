"""``opito diff`` - compare two providers' commands."""

from __future__ import annotations

import asyncio
from typing import Optional

from rich.console import Console
from rich.table import Table

from ...core.config_schema import Config
from ...provider import ProviderId, Scope, create_parser, display_name, resolve_paths, validate_sync_pair
from ...sync import diff_command, diff_commands


async def _load(config: Config, source: ProviderId, target: ProviderId, scope: Scope):
    source_parser = create_parser(source, resolve_paths(source, scope, config))
    target_parser = create_parser(target, resolve_paths(target, scope, config))
    return await source_parser.parse_all(), await target_parser.parse_all()


def diff_cli_command(
    config: Config,
    source: str,
    target: str,
    scope: str,
    name: Optional[str] = None,
    console: Optional[Console] = None,
) -> int:
    """Print the differences and return the exit code."""
    console = console or Console()
    source_id, target_id, scope_value = validate_sync_pair(source, target, scope)
    source_records, target_records = asyncio.run(_load(config, source_id, target_id, scope_value))
    source_label = display_name(source_id)
    target_label = display_name(target_id)

    if name:
        diff = diff_command(name, source_records, target_records)
        if not diff.in_source and not diff.in_target:
            console.print(f"[red]Command \"{name}\" not found in either provider[/red]")
            return 1
        if not diff.in_source:
            console.print(f"[yellow]Command \"{name}\" only exists in {target_label}[/yellow]")
            return 0
        if not diff.in_target:
            console.print(f"[blue]Command \"{name}\" only exists in {source_label}[/blue]")
            return 0

        console.print()
        console.print(f"[bold]Diff for: {name}[/bold]")
        console.print("[dim]" + "─" * 60 + "[/dim]")
        if not diff.description_matches:
            console.print("[yellow]Description differs:[/yellow]")
            console.print(f"  {source_label}: {diff.source.description}")
            console.print(f"  {target_label}: {diff.target.description}")
        if diff.content_matches:
            console.print("[green]Content is identical[/green]")
        else:
            console.print("[yellow]Content differs[/yellow]")
        return 0

    entries = diff_commands(source_records, target_records)
    if not entries:
        console.print("[green]All commands are in sync![/green]")
        return 0

    labels = {
        "different": "[yellow]Different[/yellow]",
        "source-only": f"[blue]{source_label} only[/blue]",
        "target-only": f"[cyan]{target_label} only[/cyan]",
    }
    table = Table()
    table.add_column("Command", style="bold")
    table.add_column("Status")
    for entry in entries:
        table.add_row(entry.name, labels[entry.status])
    console.print(table)
    return 0
