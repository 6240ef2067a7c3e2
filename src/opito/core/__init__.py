"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Config and markdown helpers are imported from their modules directly:
# from opito.core.config import ConfigManager
# from opito.core.markdown import split_frontmatter
