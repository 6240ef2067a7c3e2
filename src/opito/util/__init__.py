"""Utility modules."""

from .log import Log
from .error import OpitoError, describe_error, format_error

__all__ = ["Log", "OpitoError", "describe_error", "format_error"]
