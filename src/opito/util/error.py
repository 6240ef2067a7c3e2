"""Error types and user-facing error formatting."""

from typing import Any


class OpitoError(Exception):
    """Base class for errors raised deliberately by opito."""


def format_error(error: Any) -> str | None:
    """Format known opito errors into a one-line message.

    Returns None for anything else.
    """
    if isinstance(error, OpitoError):
        return str(error)
    if isinstance(error, PermissionError):
        return f"Permission denied: {error.filename or error}"
    if isinstance(error, FileNotFoundError):
        return f"File not found: {error.filename or error}"
    return None


def describe_error(error: BaseException) -> str:
    """Short human-readable message for an exception."""
    return format_error(error) or str(error) or error.__class__.__name__
