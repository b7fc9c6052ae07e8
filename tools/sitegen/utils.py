from __future__ import annotations

import json
import pathlib
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


def ensure_dir(p: pathlib.Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def parse_date(v) -> Optional[datetime]:
    """
    Parse a front-matter date into an aware UTC datetime.

    Accepts `YYYY-MM-DD`, full ISO 8601 timestamps (a trailing `Z` included)
    and date/datetime objects. Naive values are taken as UTC, the way a
    browser reads a bare ISO date. Returns None for anything else.
    """
    if isinstance(v, datetime):
        dt = v
    elif isinstance(v, date):
        dt = datetime(v.year, v.month, v.day)
    elif isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        if not s:
            return None
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None
    return as_utc(dt)


def as_utc(dt: datetime) -> datetime:
    """Aware UTC copy of `dt`; naive values are taken as UTC, like parse_date."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def date_sort_key(v) -> datetime:
    """Sort key for date strings; unparseable dates sort as the oldest."""
    return parse_date(v) or _EPOCH


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(path: pathlib.Path, data: Any) -> None:
    ensure_dir(path.parent)
    path.write_text(dump_json(data), encoding="utf-8")


def write_text(path: pathlib.Path, text: str) -> None:
    ensure_dir(path.parent)
    path.write_text(text, encoding="utf-8")
