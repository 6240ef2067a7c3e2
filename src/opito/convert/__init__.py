"""Dialect converters."""

from .converter import Converter, CopilotConverter, DroidConverter

__all__ = ["Converter", "CopilotConverter", "DroidConverter"]
