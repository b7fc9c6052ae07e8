"""
Front matter for post documents.

The header is a small line-oriented subset of YAML, parsed by hand:

    ---
    title: "Tech Review"
    date: 2024-03-01
    tags:
      - ai
      - semiconductors
    ---

- `key: value` stores a scalar (one layer of matching quotes stripped).
- `key:` with nothing after the colon opens a list; the following `- item`
  lines are collected into it as written (quotes included) until the next key line or the end of the
  header.
- `- item` lines outside an open list are ignored, as are blank lines.
- Unknown keys are kept; callers pick what they need.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Optional, Tuple

from .config import FRONTMATTER
from .errors import MissingFrontMatterError
from .utils import _norm_text

_QUOTES = ('"', "'")


class _State(enum.Enum):
    SCALAR = "scalar-key"
    ARRAY = "array-accumulation"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_metadata(section: str) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    state = _State.SCALAR
    array_key: Optional[str] = None
    items: List[str] = []

    def _flush():
        nonlocal state, array_key, items
        if state is _State.ARRAY and array_key is not None:
            meta[array_key] = items
        state, array_key, items = _State.SCALAR, None, []

    for line in section.split("\n"):
        s = line.strip()
        if not s:
            continue

        if s.startswith("- "):
            if state is _State.ARRAY:
                items.append(s[2:])
            continue

        if ":" not in s:
            continue

        # close the previous list before the new key can see it
        _flush()

        key, _, value = s.partition(":")
        key, value = key.strip(), value.strip()
        if value == "":
            state, array_key, items = _State.ARRAY, key, []
        else:
            meta[key] = _unquote(value)

    _flush()
    return meta


def parse_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a document into (metadata, body).

    Raises MissingFrontMatterError when the text does not open with a
    `---` delimited header. The body comes back trimmed.
    """
    m = FRONTMATTER.match(_norm_text(text))
    if not m:
        raise MissingFrontMatterError()
    return parse_metadata(m.group(1) or ""), m.group(2).strip()


def _quote(value: str) -> str:
    if value == "" or value != value.strip() or value[0] in _QUOTES or value.startswith("- "):
        return f'"{value}"'
    return value


def serialize_frontmatter(meta: Dict[str, Any], body: str = "") -> str:
    """
    Render `meta` in the grammar parse_frontmatter reads.

    List items are written verbatim, so they round-trip only when they are
    non-empty and carry no surrounding whitespace.
    """
    lines = ["---"]
    for key, value in meta.items():
        if isinstance(value, (list, tuple)):
            lines.append(f"{key}:")
            lines.extend(f"  - {item}" for item in value)
        else:
            lines.append(f"{key}: {_quote(str(value))}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body
