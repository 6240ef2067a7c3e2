"""``opito sync`` - copy commands from one provider to another."""

from __future__ import annotations

import asyncio
import signal
from typing import List, Optional

import typer
from rich.console import Console

from ...core.config_schema import Config
from ...provider import (
    PROVIDERS,
    ProviderId,
    Scope,
    default_target,
    display_name,
    get_provider_info,
    parse_provider,
    parse_scope,
    resolve_paths,
    validate_sync_pair,
)
from ...sync import DirectoryWatcher, SyncEngine, SyncOptions, SyncReport, WatchRunner
from ...util.log import Log
from ..ui import print_report, print_results

log = Log.create({"service": "cli.sync"})


def parse_filter(value: Optional[str]) -> Optional[List[str]]:
    """Split ``a, b,c`` into names; empty input means no filter."""
    if not value:
        return None
    names = [item.strip() for item in value.split(",") if item.strip()]
    return names or None


def prompt_for_sync_options() -> tuple[ProviderId, ProviderId, Scope]:
    """Ask for source, target and scope on the terminal."""
    choices = ", ".join(p.id.value for p in PROVIDERS)
    source = parse_provider(typer.prompt(f"Source provider ({choices})").strip())

    suggested = default_target(source)
    target = parse_provider(
        typer.prompt(
            f"Target provider (syncing from {display_name(source)})",
            default=suggested.value if suggested else None,
        ).strip(),
        "target",
    )

    if not (get_provider_info(source).supports_local_scope or get_provider_info(target).supports_local_scope):
        return source, target, Scope.GLOBAL
    scope = parse_scope(typer.prompt("Scope (local/global)", default=Scope.GLOBAL.value).strip())
    return source, target, scope


def resolve_invocation(
    provider: Optional[str],
    target: Optional[str],
    scope: Optional[str],
    interactive: bool,
) -> tuple[ProviderId, ProviderId, Scope]:
    """Work out source, target and scope from flags or prompts, validating all three."""
    if interactive or (not provider and not target):
        source_id, target_id, scope_value = prompt_for_sync_options()
        return validate_sync_pair(source_id, target_id, scope_value)

    if not provider:
        raise typer.BadParameter("Provider is required. Use --interactive or pass --provider.")

    source_id = parse_provider(provider)
    target_value = target or (default_target(source_id) or ProviderId.OPENCODE).value
    return validate_sync_pair(source_id, target_value, scope or Scope.GLOBAL.value)


async def _watch(engine: SyncEngine, watch_path: str, options: SyncOptions, console: Console) -> None:
    def on_report(report: SyncReport) -> None:
        print_results(console, report, options.dry_run)
        print_report(console, report)
        console.print("[dim]Watching for changes... (Press Ctrl+C to stop)[/dim]")

    runner = WatchRunner(
        run_pass=lambda: engine.sync(options),
        watcher=DirectoryWatcher(watch_path),
        on_report=on_report,
    )
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, runner.stop)
    except (NotImplementedError, RuntimeError):
        # No signal support here (e.g. Windows); Ctrl+C surfaces as KeyboardInterrupt.
        pass
    await runner.run()


def sync_command(
    config: Config,
    source: ProviderId,
    target: ProviderId,
    scope: Scope,
    options: SyncOptions,
    watch: bool = False,
    console: Optional[Console] = None,
) -> int:
    """Run a sync (or watch) and return the process exit code."""
    console = console or Console()
    log.info("sync requested", {"source": source.value, "target": target.value, "scope": scope.value, "watch": watch})
    engine = SyncEngine.for_providers(config, source, target, scope)

    console.print(
        f"[blue]Syncing from {display_name(source)} to {display_name(target)} ({scope.value} scope)...[/blue]"
    )

    if watch:
        watch_path = resolve_paths(source, scope, config).commands
        try:
            asyncio.run(_watch(engine, watch_path, options, console))
        except KeyboardInterrupt:
            pass
        console.print("[dim]Stopped watching.[/dim]")
        return 0

    report = asyncio.run(engine.sync(options))
    print_results(console, report, options.dry_run)
    print_report(console, report)
    return 1 if report.failed else 0
