"""``opito list`` - show the commands each provider has."""

from __future__ import annotations

import asyncio
import json
from typing import Dict, List, Literal, Optional

import typer
from rich.console import Console

from ...command import CommandRecord
from ...core.config_schema import Config
from ...provider import (
    ProviderId,
    Scope,
    all_providers,
    create_parser,
    display_name,
    is_enabled,
    parse_provider,
    resolve_paths,
)
from ..ui import command_table

ListFormat = Literal["table", "json"]


def selected_providers(source: str, config: Config) -> List[ProviderId]:
    """``all`` means every enabled provider; a named provider is listed even if disabled."""
    if source.strip().lower() == "all":
        return [provider for provider in all_providers() if is_enabled(provider, config)]
    return [parse_provider(source)]


async def collect_commands(
    config: Config,
    providers: List[ProviderId],
    scope: Scope,
    cwd: Optional[str] = None,
) -> Dict[ProviderId, List[CommandRecord]]:
    """Parse every requested provider, one after the other."""
    commands: Dict[ProviderId, List[CommandRecord]] = {}
    for provider in providers:
        parser = create_parser(provider, resolve_paths(provider, scope, config, cwd))
        commands[provider] = list(await parser.parse_all())
    return commands


def list_command(
    config: Config,
    source: str = "all",
    scope: Scope = Scope.GLOBAL,
    output: ListFormat = "table",
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    commands = asyncio.run(collect_commands(config, selected_providers(source, config), scope))

    if output == "json":
        payload = {
            provider.value: [record.to_json() for record in records]
            for provider, records in commands.items()
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for provider, records in commands.items():
        console.print()
        if not records:
            console.print(f"[bold]{display_name(provider)}[/bold]")
            console.print("[yellow]No commands found[/yellow]")
            continue
        console.print(command_table(display_name(provider), records))
