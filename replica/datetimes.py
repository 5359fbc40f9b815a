"""Parsing and formatting of QSO date/time strings."""

import re
import time
from datetime import datetime
from typing import Optional

_LOCAL_DT = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})")
_ZONED_SUFFIX = re.compile(r"([zZ]|[+-]\d{2}:?\d{2})$")


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_local_dt(dt: Optional[str]) -> Optional[datetime]:
    """Parse a ``YYYY-MM-DDTHH:MM`` prefix as naive local time."""
    if not dt:
        return None
    m = _LOCAL_DT.match(dt)
    if not m:
        return None
    try:
        return datetime(*(int(g) for g in m.groups()))
    except ValueError:
        return None


def parse_flexible_dt(dt: Optional[str]) -> Optional[datetime]:
    """
    Parse either a zoned ISO timestamp (``Z`` or ``+HH:MM``/``+HHMM``) or
    the strict local pattern, with a space accepted in place of ``T``.
    """
    if not dt:
        return None
    s = dt.strip()
    if _ZONED_SUFFIX.search(s):
        parsed = _parse_zoned(s)
        if parsed is not None:
            return parsed
    return parse_local_dt(s.replace(" ", "T", 1))


def _parse_zoned(s: str) -> Optional[datetime]:
    candidate = s[:-1] + "+00:00" if s[-1] in "zZ" else s
    # +HHMM -> +HH:MM
    candidate = re.sub(r"([+-]\d{2})(\d{2})$", r"\1:\2", candidate)
    try:
        return datetime.fromisoformat(candidate.replace(" ", "T", 1))
    except ValueError:
        return None


def _to_ms(d: Optional[datetime]) -> Optional[int]:
    return int(d.timestamp() * 1000) if d is not None else None


def ts_from_local_dt(dt: Optional[str]) -> Optional[int]:
    return _to_ms(parse_local_dt(dt))


def ts_from_dt(dt: Optional[str]) -> Optional[int]:
    return _to_ms(parse_flexible_dt(dt))


def to_local_input_value(d: datetime) -> str:
    return d.strftime("%Y-%m-%dT%H:%M")


def format_display_dt(dt: Optional[str]) -> str:
    return dt.replace("T", " ") if dt else ""
