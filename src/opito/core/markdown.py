"""Markdown frontmatter helpers.

Command files are markdown with a leading YAML block::

    ---
    description: Review the staged diff
    ---

    Look at the staged changes and ...

Reading is tolerant: a malformed YAML block becomes an empty mapping.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml


_FRONTMATTER_RE = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*\r?\n(.*)\Z", re.DOTALL)

# Keep long descriptions on one line so they survive a write/parse cycle.
_YAML_WIDTH = 4096


def split_frontmatter(text: str) -> Optional[Tuple[str, str]]:
    """Split a file into ``(frontmatter_text, body)``.

    Returns None when the text does not open with a delimited block.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def load_frontmatter(text: str) -> Dict[str, Any]:
    """Parse a YAML frontmatter block into a mapping.

    Anything that is not a valid YAML mapping yields ``{}``.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(key): value for key, value in data.items()}


def dump_frontmatter(data: Mapping[str, Any]) -> str:
    return yaml.safe_dump(
        dict(data),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=_YAML_WIDTH,
    )


def render_markdown(frontmatter: Mapping[str, Any], body: str) -> str:
    """Render a command file: frontmatter block, blank line, body, newline."""
    return f"---\n{dump_frontmatter(frontmatter)}---\n\n{body}\n"
