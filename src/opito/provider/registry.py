"""Provider catalog, path resolution and parser/converter factories.

Every provider is a member of :class:`ProviderId`; parsers and
converters are looked up in tables keyed by it, so adding a provider
means adding one row to each table.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..convert import Converter, CopilotConverter, DroidConverter
from ..core.config_schema import Config
from ..parser import ClaudeParser, CommandParser, CopilotParser, DroidParser, OpencodeParser
from ..util.error import OpitoError


class ProviderId(str, Enum):
    """Supported providers."""
    CLAUDE = "claude"
    OPENCODE = "opencode"
    COPILOT = "copilot"
    DROID = "droid"


class Scope(str, Enum):
    """Where provider paths are resolved: the user's home or the current project."""
    LOCAL = "local"
    GLOBAL = "global"


class InvalidProviderError(OpitoError):
    """Raised for an unknown provider identifier."""

    def __init__(self, name: str, role: str = "provider"):
        self.name = name
        self.role = role
        available = ", ".join(p.value for p in ProviderId)
        super().__init__(f"Invalid {role}: {name!r}. Available providers: {available}")


class InvalidScopeError(OpitoError):
    """Raised for a scope other than ``local`` or ``global``."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid scope: {name!r}. Use 'local' or 'global'")


class SameProviderError(OpitoError):
    """Raised when source and target are the same provider."""

    def __init__(self, provider: "ProviderId"):
        self.provider = provider
        super().__init__("Source and target providers cannot be the same")


class ProviderDisabledError(OpitoError):
    """Raised when a sync involves a provider switched off in the config."""

    def __init__(self, provider: "ProviderId"):
        self.provider = provider
        super().__init__(f"Provider {provider.value!r} is disabled. Set {provider.value}.enabled to true")


@dataclass(frozen=True)
class ProviderInfo:
    """Static description of a provider."""
    id: ProviderId
    display_name: str
    description: str
    supports_local_scope: bool


@dataclass(frozen=True)
class ProviderPaths:
    """Directories for one provider in one scope.

    ``commands`` is the directory a sync writes into and backs up; for
    Copilot it is the prompts directory.
    """
    commands: str
    prompts: Optional[str] = None
    instructions: Optional[str] = None
    agents: Optional[str] = None


PROVIDERS: List[ProviderInfo] = [
    ProviderInfo(
        id=ProviderId.CLAUDE,
        display_name="Claude Code",
        description="Claude Code commands from ~/.claude/commands/",
        supports_local_scope=False,
    ),
    ProviderInfo(
        id=ProviderId.OPENCODE,
        display_name="OpenCode",
        description="OpenCode commands from ~/.config/opencode/commands/",
        supports_local_scope=True,
    ),
    ProviderInfo(
        id=ProviderId.COPILOT,
        display_name="VS Code Copilot",
        description="VS Code Copilot prompts from .github/prompts/",
        supports_local_scope=True,
    ),
    ProviderInfo(
        id=ProviderId.DROID,
        display_name="Droid (Factory AI)",
        description="Factory AI Droid commands from ~/.factory/commands/",
        supports_local_scope=True,
    ),
]

_DEFAULT_TARGETS: Dict[ProviderId, ProviderId] = {
    ProviderId.CLAUDE: ProviderId.OPENCODE,
    ProviderId.OPENCODE: ProviderId.CLAUDE,
    ProviderId.COPILOT: ProviderId.CLAUDE,
    ProviderId.DROID: ProviderId.CLAUDE,
}

# Project-relative directories used by the local scope.
_LOCAL_DIRS: Dict[ProviderId, tuple[str, ...]] = {
    ProviderId.OPENCODE: (".opencode", "commands"),
    ProviderId.DROID: (".factory", "commands"),
}


def get_provider_info(provider: ProviderId) -> ProviderInfo:
    for info in PROVIDERS:
        if info.id == provider:
            return info
    raise InvalidProviderError(str(provider))


def all_providers() -> List[ProviderId]:
    return [info.id for info in PROVIDERS]


def display_name(provider: ProviderId) -> str:
    return get_provider_info(provider).display_name


def is_valid_provider(name: str) -> bool:
    return name in {p.value for p in ProviderId}


def is_valid_scope(name: str) -> bool:
    return name in {s.value for s in Scope}


def parse_provider(name: str | ProviderId, role: str = "provider") -> ProviderId:
    """Turn user input into a :class:`ProviderId`, raising on unknown names."""
    if isinstance(name, ProviderId):
        return name
    text = str(name).strip().lower()
    if not is_valid_provider(text):
        raise InvalidProviderError(str(name), role)
    return ProviderId(text)


def parse_scope(name: str | Scope) -> Scope:
    if isinstance(name, Scope):
        return name
    text = str(name).strip().lower()
    if not is_valid_scope(text):
        raise InvalidScopeError(str(name))
    return Scope(text)


def validate_sync_pair(
    source: str | ProviderId,
    target: str | ProviderId,
    scope: str | Scope,
) -> tuple[ProviderId, ProviderId, Scope]:
    """Check a sync invocation before any filesystem access."""
    source_id = parse_provider(source, "provider")
    target_id = parse_provider(target, "target")
    scope_value = parse_scope(scope)
    if source_id == target_id:
        raise SameProviderError(source_id)
    return source_id, target_id, scope_value


def is_enabled(provider: ProviderId, config: Config) -> bool:
    """Claude and OpenCode are always on; Copilot and Droid can be switched off."""
    if provider == ProviderId.COPILOT:
        return config.copilot.enabled
    if provider == ProviderId.DROID:
        return config.droid.enabled
    return True


def ensure_enabled(config: Config, *providers: ProviderId) -> None:
    for provider in providers:
        if not is_enabled(provider, config):
            raise ProviderDisabledError(provider)


def _cwd_path(path: str, cwd: str) -> str:
    if os.path.isabs(path):
        return path
    return str(Path(cwd, path).resolve())


def resolve_paths(
    provider: ProviderId,
    scope: Scope,
    config: Config,
    cwd: Optional[str] = None,
) -> ProviderPaths:
    """Directories for ``provider`` in ``scope``.

    Copilot always resolves against the working directory: its prompts
    belong to a repository, not to the user. Claude has no project-level
    commands, so the local scope keeps its configured path.
    """
    cwd = cwd or os.getcwd()

    if provider == ProviderId.COPILOT:
        prompts = _cwd_path(config.copilot.prompts_path, cwd)
        return ProviderPaths(
            commands=prompts,
            prompts=prompts,
            instructions=_cwd_path(config.copilot.instructions_path, cwd),
            agents=_cwd_path(config.copilot.agents_path, cwd),
        )

    if scope == Scope.LOCAL and provider in _LOCAL_DIRS:
        return ProviderPaths(commands=str(Path(cwd, *_LOCAL_DIRS[provider]).resolve()))

    configured = {
        ProviderId.CLAUDE: config.claude.commands_path,
        ProviderId.OPENCODE: config.opencode.commands_path,
        ProviderId.DROID: config.droid.commands_path,
    }
    return ProviderPaths(commands=configured[provider])


_PARSERS: Dict[ProviderId, Callable[[ProviderPaths], CommandParser]] = {
    ProviderId.CLAUDE: lambda paths: ClaudeParser(paths.commands),
    ProviderId.OPENCODE: lambda paths: OpencodeParser(paths.commands),
    ProviderId.COPILOT: lambda paths: CopilotParser(
        paths.prompts or paths.commands,
        paths.instructions or os.path.join(paths.commands, "instructions"),
        paths.agents or os.path.join(paths.commands, "agents"),
    ),
    ProviderId.DROID: lambda paths: DroidParser(paths.commands),
}

# Pairs involving Copilot use the Copilot converter, then Droid, then the base one.
_CONVERTERS: List[tuple[ProviderId, Callable[[str], Converter]]] = [
    (ProviderId.COPILOT, lambda direction: CopilotConverter(direction)),  # type: ignore[arg-type]
    (ProviderId.DROID, lambda direction: DroidConverter(direction)),  # type: ignore[arg-type]
]


def create_parser(provider: ProviderId, paths: ProviderPaths) -> CommandParser:
    return _PARSERS[provider](paths)


def create_converter(source: ProviderId, target: ProviderId) -> Optional[Converter]:
    """Converter for ``source`` -> ``target``; None when they are the same provider."""
    if source == target:
        return None
    for provider, factory in _CONVERTERS:
        if target == provider:
            return factory("to")
        if source == provider:
            return factory("from")
    return Converter()


def default_target(source: ProviderId) -> Optional[ProviderId]:
    """Suggested target when the caller names only a source."""
    return _DEFAULT_TARGETS.get(source)
