"""Clock-time helpers for task times stored as 24-hour "HH:MM" strings."""
from __future__ import annotations
import re
from typing import Optional, Tuple

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_ENTRY = re.compile(r"^(\d{1,2}):(\d{2})$")


def _leading_int(text: str) -> Optional[int]:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def format_time(value: Optional[str]) -> str:
    """'13:05' -> '1:05pm'. Strings already carrying am/pm come back as-is."""
    if not value:
        return ""
    lowered = value.lower()
    if "am" in lowered or "pm" in lowered:
        return value
    parts = value.split(":")
    hour_part, minute = parts[0], (parts[1] if len(parts) > 1 else "")
    hour = _leading_int(hour_part)
    if hour is None:
        return value
    ampm = "pm" if hour >= 12 else "am"
    return f"{hour % 12 or 12}:{minute}{ampm}"


def time_sort_key(value: Optional[str]) -> Tuple[int, int]:
    hour_part, _, minute_part = (value or "").partition(":")
    hour = _leading_int(hour_part)
    minute = _leading_int(minute_part)
    return (99 if hour is None else hour, 99 if minute is None else minute)


def normalize_time(value: Optional[str]) -> Optional[str]:
    """Validate an entry-field time. '' -> None, '9:30' -> '09:30'."""
    text = (value or "").strip()
    if not text:
        return None
    m = _ENTRY.match(text)
    if not m:
        raise ValueError(f"Expected HH:MM, got {value!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return f"{hour:02d}:{minute:02d}"
