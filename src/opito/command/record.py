"""Command Record models shared by every provider."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CommandKind = Literal["prompt", "instruction", "agent"]


class CommandRecord(BaseModel):
    """One slash command as read from (or destined for) a provider directory.

    Attributes:
        name: File base name with the provider suffix stripped
        description: ``description`` frontmatter value, ``""`` if absent
        content: Markdown body after the frontmatter, trimmed
        frontmatter: Every key found in the source frontmatter block
        source_path: Absolute path the record was read from
    """

    name: str
    description: str = ""
    content: str
    frontmatter: Dict[str, Any] = Field(default_factory=dict)
    source_path: str = Field("", alias="sourcePath")

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        """JSON-ready mapping using the camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class CopilotCommandRecord(CommandRecord):
    """Copilot prompt, instruction or agent with its extra frontmatter fields."""

    kind: CommandKind = "prompt"
    agent: Optional[str] = None
    model: Optional[str] = None
    tools: Optional[List[str]] = None
    argument_hint: Optional[str] = Field(None, alias="argumentHint")
