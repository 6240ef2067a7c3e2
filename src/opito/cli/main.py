"""CLI entry point for opito.

Sync slash commands between Claude Code, OpenCode, VS Code Copilot and
Factory Droid.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..backup import BackupManager
from ..core.config import ConfigManager
from ..core.config_schema import Config
from ..provider import PROVIDERS, parse_scope
from ..sync import SyncOptions
from ..util.error import OpitoError, format_error
from ..util.log import Log, LogFormat, LogLevel

app = typer.Typer(
    name="opito",
    help="Sync slash commands between AI coding assistants",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


@dataclass
class CliState:
    """Per-invocation settings shared with subcommands through ``ctx.obj``."""
    manager: ConfigManager
    log_level: Optional[str] = None
    print_logs: bool = False


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"opito {__version__}")
        raise typer.Exit()


def fail(error: BaseException) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(format_error(error) or str(error))}")
    raise typer.Exit(1)


def load_config(ctx: typer.Context) -> Config:
    """Load config and configure logging from it (CLI flags win)."""
    state: CliState = ctx.obj
    try:
        config = state.manager.load()
    except OpitoError as e:
        fail(e)

    try:
        level = LogLevel.parse(state.log_level or config.logging.level)
    except ValueError as e:
        fail(e)
    Log.configure(
        level=level,
        format=LogFormat.parse(config.logging.format),
        console=state.print_logs,
        file=not state.print_logs,
    )
    return config


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to the config file (default: user config directory)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level: debug, info, warn, error",
    ),
    print_logs: bool = typer.Option(
        False,
        "--print-logs",
        help="Write logs to stderr instead of the log file",
    ),
):
    """opito - keep slash commands in sync across AI coding assistants."""
    ctx.obj = CliState(manager=ConfigManager(config_file), log_level=log_level, print_logs=print_logs)


@app.command()
def sync(
    ctx: typer.Context,
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Source provider: claude, opencode, copilot, droid",
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Target provider (default depends on the source)",
    ),
    scope: Optional[str] = typer.Option(
        None,
        "--scope",
        "-s",
        help="Path scope: global (home directory) or local (current project)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be synced without making changes",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Skip the backup and overwrite existing commands",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        help="Watch the source for changes and sync automatically",
    ),
    filter: Optional[str] = typer.Option(
        None,
        "--filter",
        help="Comma-separated list of command names to sync",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Choose provider, target and scope interactively",
    ),
):
    """Sync commands from one provider to another."""
    from .cmd.sync import parse_filter, resolve_invocation, sync_command

    config = load_config(ctx)
    try:
        source_id, target_id, scope_value = resolve_invocation(provider, target, scope, interactive)
        code = sync_command(
            config,
            source_id,
            target_id,
            scope_value,
            SyncOptions(dry_run=dry_run, force=force, filter=parse_filter(filter)),
            watch=watch,
            console=console,
        )
    except OpitoError as e:
        fail(e)
    if code:
        raise typer.Exit(code)


@app.command("list")
def list_(
    ctx: typer.Context,
    provider: str = typer.Option(
        "all",
        "--provider",
        "-p",
        help="Provider to list, or 'all'",
    ),
    scope: str = typer.Option(
        "global",
        "--scope",
        "-s",
        help="Path scope: global or local",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
):
    """List the commands each provider has."""
    from .cmd.list import list_command

    if format not in ("table", "json"):
        console.print(f"[red]Error:[/red] Invalid format: {format!r}. Use 'table' or 'json'")
        raise typer.Exit(1)

    config = load_config(ctx)
    try:
        list_command(config, provider, parse_scope(scope), format, console=console)  # type: ignore[arg-type]
    except OpitoError as e:
        fail(e)


@app.command()
def diff(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Command to compare in detail"),
    provider: str = typer.Option("claude", "--provider", "-p", help="Source provider"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target provider"),
    scope: str = typer.Option("global", "--scope", "-s", help="Path scope: global or local"),
):
    """Show differences between two providers' commands."""
    from ..provider import ProviderId, default_target, parse_provider
    from .cmd.diff import diff_cli_command

    config = load_config(ctx)
    try:
        source_id = parse_provider(provider)
        target_value = target or (default_target(source_id) or ProviderId.OPENCODE).value
        code = diff_cli_command(config, source_id.value, target_value, scope, name, console=console)
    except OpitoError as e:
        fail(e)
    if code:
        raise typer.Exit(code)


@app.command()
def init(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite an existing config with defaults"),
):
    """Write the default configuration file."""
    state: CliState = ctx.obj
    manager = state.manager

    if manager.exists() and not yes:
        console.print("[yellow]Configuration already exists[/yellow]")
        console.print(f"  {manager.config_file}")
        console.print("Use --yes to overwrite with defaults")
        return

    defaults = manager.default()
    manager.init(overwrite=yes)
    console.print(f"[green]Configuration initialized:[/green] {manager.config_file}")

    for label, path in (
        ("Claude commands", defaults.claude.commands_path),
        ("OpenCode commands", defaults.opencode.commands_path),
        ("Droid commands", defaults.droid.commands_path),
    ):
        if Path(path).is_dir():
            console.print(f"  {label}: {path}")
        else:
            console.print(f"  [yellow]{label} directory not found:[/yellow] {path}")

    console.print()
    console.print('Run "opito sync --provider claude" to start synchronizing commands')


@app.command()
def doctor(ctx: typer.Context):
    """Check provider directories and configuration."""
    from .cmd.doctor import doctor_command

    config = load_config(ctx)
    code = doctor_command(config, console=console)
    if code:
        raise typer.Exit(code)


@app.command()
def backups(ctx: typer.Context):
    """List existing backups, newest first."""
    config = load_config(ctx)
    entries = BackupManager(config.backup.path, config.backup.max_backups).list()

    if not entries:
        console.print("[yellow]No backups found[/yellow]")
        console.print(f"  [dim]{config.backup.path}[/dim]")
        return

    table = Table(title=f"Backups ({len(entries)})", title_justify="left")
    table.add_column("Name", style="cyan")
    table.add_column("Date")
    for entry in entries:
        table.add_row(entry.name, entry.date.astimezone().strftime("%Y-%m-%d %H:%M:%S"))
    console.print(table)


@app.command()
def providers():
    """List supported providers."""
    table = Table(title="Providers", title_justify="left")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Local scope")
    table.add_column("Description", style="dim")
    for info in PROVIDERS:
        table.add_row(
            info.id.value,
            info.display_name,
            "yes" if info.supports_local_scope else "no",
            info.description,
        )
    console.print(table)


if __name__ == "__main__":
    app()
