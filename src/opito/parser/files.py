"""Async file helpers used by the parsers.

Blocking filesystem calls run in a worker thread so a sync pass can be
awaited from the watch loop without stalling it.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List


def _list_files(directory: str, suffix: str) -> List[str]:
    path = Path(directory)
    if not path.is_dir():
        return []
    with os.scandir(path) as entries:
        return [
            entry.name
            for entry in entries
            if entry.name.endswith(suffix) and entry.is_file()
        ]


async def list_files(directory: str, suffix: str = ".md") -> List[str]:
    """Names of regular files in ``directory`` ending with ``suffix``.

    A missing directory yields an empty list. Order follows the
    filesystem's enumeration order.
    """
    return await asyncio.to_thread(_list_files, directory, suffix)


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


async def read_text(path: str) -> str:
    """Read UTF-8 text with line endings kept as they are on disk."""
    return await asyncio.to_thread(_read_text, path)


def _write_text(path: str, content: str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8", newline="") as f:
        f.write(content)


async def write_text(path: str, content: str) -> None:
    """Write ``content``, creating parent directories as needed."""
    await asyncio.to_thread(_write_text, path, content)


async def file_exists(path: str) -> bool:
    return await asyncio.to_thread(Path(path).is_file)
