"""Provider parsers: read a provider's directory into Command Records and write them back."""

from .copilot import CopilotParser
from .markdown import (
    ClaudeParser,
    CommandParser,
    DroidParser,
    MarkdownCommandParser,
    OpencodeParser,
)

__all__ = [
    "ClaudeParser",
    "CommandParser",
    "CopilotParser",
    "DroidParser",
    "MarkdownCommandParser",
    "OpencodeParser",
]
