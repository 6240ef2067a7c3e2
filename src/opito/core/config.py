"""Configuration management.

The configuration is an explicit value: a :class:`ConfigManager` is
constructed for one config file, loads it once and hands the resulting
:class:`Config` to whoever needs it. Nothing is stored at module level,
so tests can point a manager at a temporary file.

Sources, lowest precedence first:
1. Built-in defaults
2. The config file (``<user config dir>/config.json``)
3. ``OPITO_CONFIG_CONTENT`` environment variable (inline JSON)
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .config_loader import deep_merge, load_json_file, parse_json_text, write_json_file
from .config_schema import (
    BackupConfig,
    ClaudeConfig,
    Config,
    CopilotConfig,
    DroidConfig,
    LoggingConfig,
    OpencodeConfig,
)
from .global_paths import GlobalPath
from ..util.error import OpitoError
from ..util.log import Log

log = Log.create({"service": "config"})

__all__ = [
    "BackupConfig",
    "ClaudeConfig",
    "Config",
    "ConfigError",
    "ConfigManager",
    "CopilotConfig",
    "DroidConfig",
    "LoggingConfig",
    "OpencodeConfig",
    "expand_paths",
]


class ConfigError(OpitoError):
    """Configuration error."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error in {path}: {message}")


def _expand_home(path: str) -> str:
    """Expand ``~`` but leave relative paths relative."""
    if path == "~" or path.startswith("~/"):
        return GlobalPath.expand(path)
    return path


def expand_paths(config: Config) -> Config:
    """Return a copy of ``config`` with ``~/`` expanded and user-level paths resolved.

    Copilot paths only get ``~`` expansion; relative ones stay relative
    to whichever working directory a sync runs in.
    """
    return config.model_copy(
        update={
            "claude": config.claude.model_copy(
                update={"commands_path": GlobalPath.expand(config.claude.commands_path)}
            ),
            "opencode": config.opencode.model_copy(
                update={"commands_path": GlobalPath.expand(config.opencode.commands_path)}
            ),
            "droid": config.droid.model_copy(
                update={"commands_path": GlobalPath.expand(config.droid.commands_path)}
            ),
            "copilot": config.copilot.model_copy(
                update={
                    "prompts_path": _expand_home(config.copilot.prompts_path),
                    "instructions_path": _expand_home(config.copilot.instructions_path),
                    "agents_path": _expand_home(config.copilot.agents_path),
                }
            ),
            "backup": config.backup.model_copy(
                update={"path": GlobalPath.expand(config.backup.path)}
            ),
        }
    )


class ConfigManager:
    """Loads, saves and initializes one opito config file."""

    def __init__(self, config_file: Optional[str] = None) -> None:
        self.config_file = config_file or GlobalPath.config_file()
        self._cache: Optional[Config] = None

    def _read(self) -> Dict[str, Any]:
        data = load_json_file(self.config_file)
        inline = os.environ.get("OPITO_CONFIG_CONTENT")
        if inline:
            data = deep_merge(data, parse_json_text(inline, "OPITO_CONFIG_CONTENT"))
        return data

    def load(self) -> Config:
        """Load the configuration, applying defaults for missing keys.

        Raises:
            ConfigError: If the file holds values of the wrong shape.
        """
        if self._cache is not None:
            return self._cache

        data = self._read()
        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(self.config_file, str(e)) from e

        self._cache = expand_paths(config)
        log.debug("config loaded", {"path": self.config_file, "exists": self.exists()})
        return self._cache

    def reload(self) -> Config:
        self._cache = None
        return self.load()

    def save(self, partial: Dict[str, Any]) -> Config:
        """Merge ``partial`` (JSON key names) over the current config and persist it."""
        current = self.load().model_dump(by_alias=True)
        merged = deep_merge(current, partial)
        try:
            config = Config.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(self.config_file, str(e)) from e

        write_json_file(self.config_file, config.model_dump(by_alias=True))
        self._cache = expand_paths(config)
        log.info("config saved", {"path": self.config_file})
        return self._cache

    def init(self, overwrite: bool = False) -> bool:
        """Write the default config file.

        Returns True when a file was written, False when one already
        existed and ``overwrite`` was not set.
        """
        if self.exists() and not overwrite:
            return False
        write_json_file(self.config_file, Config().model_dump(by_alias=True))
        self._cache = None
        log.info("config initialized", {"path": self.config_file})
        return True

    def exists(self) -> bool:
        return Path(self.config_file).is_file()

    @staticmethod
    def default() -> Config:
        """Defaults with paths expanded."""
        return expand_paths(Config())
