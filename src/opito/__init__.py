"""Opito - slash command sync for AI coding assistants.

Keeps command definitions for Claude Code, OpenCode, VS Code Copilot
and Factory Droid in step by reading one provider's markdown commands
and writing them in another provider's dialect.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
