"""Shared test helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Dict


def write_command(
    directory: Path,
    name: str,
    description: str = "",
    body: str = "Do the thing.",
    suffix: str = ".md",
    extra: str = "",
) -> Path:
    """Write a command file with a frontmatter block."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}{suffix}"
    lines = ["---", f"description: {description}"]
    if extra:
        lines.append(extra.rstrip("\n"))
    lines.extend(["---", "", body, ""])
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def snapshot(directory: Path) -> Dict[str, bytes]:
    """Relative path -> bytes for every file under ``directory``."""
    if not directory.exists():
        return {}
    return {
        str(path.relative_to(directory)): path.read_bytes()
        for path in sorted(directory.rglob("*"))
        if path.is_file()
    }
