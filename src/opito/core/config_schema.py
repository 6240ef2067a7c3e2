"""Configuration schema - Pydantic models for the opito config file."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ClaudeConfig(BaseModel):
    """Claude Code command directory."""
    commands_path: str = Field("~/.claude/commands", alias="commandsPath")

    model_config = ConfigDict(populate_by_name=True)


class OpencodeConfig(BaseModel):
    """OpenCode command directory."""
    commands_path: str = Field("~/.config/opencode/commands", alias="commandsPath")

    model_config = ConfigDict(populate_by_name=True)


class CopilotConfig(BaseModel):
    """VS Code Copilot prompt directories.

    Relative paths are resolved against the working directory when used,
    since Copilot prompts belong to a repository.
    """
    prompts_path: str = Field(".github/prompts", alias="promptsPath")
    instructions_path: str = Field(".github/prompts/instructions", alias="instructionsPath")
    agents_path: str = Field(".github/prompts/agents", alias="agentsPath")
    enabled: bool = True

    model_config = ConfigDict(populate_by_name=True)


class DroidConfig(BaseModel):
    """Factory Droid command directory."""
    commands_path: str = Field("~/.factory/commands", alias="commandsPath")
    enabled: bool = True

    model_config = ConfigDict(populate_by_name=True)


class BackupConfig(BaseModel):
    """Backup settings applied before a sync overwrites anything."""
    enabled: bool = True
    max_backups: int = Field(10, alias="maxBackups", ge=1)
    path: str = "~/.config/opito/backups"

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging settings."""
    level: Literal["debug", "info", "warn", "error"] = "info"
    format: Literal["kv", "json", "pretty"] = "kv"


class Config(BaseModel):
    """Top-level opito configuration."""
    claude: ClaudeConfig = Field(default_factory=ClaudeConfig)
    opencode: OpencodeConfig = Field(default_factory=OpencodeConfig)
    copilot: CopilotConfig = Field(default_factory=CopilotConfig)
    droid: DroidConfig = Field(default_factory=DroidConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
