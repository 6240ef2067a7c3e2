"""Rich rendering helpers for CLI output."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..command import CommandRecord
from ..sync import SyncAction, SyncReport

_ACTION_STYLES = {
    SyncAction.CREATED: "green",
    SyncAction.UPDATED: "yellow",
    SyncAction.SKIPPED: "dim",
    SyncAction.ERROR: "red",
}


def truncate(text: str, limit: int = 50) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def print_results(console: Console, report: SyncReport, dry_run: bool = False) -> None:
    prefix = "[dim](dry run)[/dim] " if dry_run else ""
    for result in report.results:
        style = _ACTION_STYLES[result.action]
        line = f"{prefix}[{style}]{result.action.value.capitalize()}:[/{style}] {escape(result.command)}"
        if result.error:
            line += f" [dim]- {escape(result.error)}[/dim]"
        console.print(line)


def print_report(console: Console, report: SyncReport) -> None:
    """Print the summary block of a sync pass."""
    console.print()
    console.print("[bold]Sync Report[/bold]")
    console.print("[dim]" + "─" * 40 + "[/dim]")
    console.print(f"[blue]Total:[/blue]     {report.total}")
    console.print(f"[green]Created:[/green]   {report.created}")
    console.print(f"[yellow]Updated:[/yellow]   {report.updated}")
    console.print(f"[red]Errors:[/red]    {report.errors}")
    if report.backup_path:
        console.print(f"[dim]Backup:    {report.backup_path}[/dim]")
    console.print("[dim]" + "─" * 40 + "[/dim]")


def command_table(title: str, commands: Sequence[CommandRecord]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Command", style="cyan")
    table.add_column("Description")
    for command in commands:
        table.add_row(command.name, truncate(command.description))
    return table
