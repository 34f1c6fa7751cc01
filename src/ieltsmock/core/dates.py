from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

API_DATETIME_FORMAT = "%d.%m.%Y %H:%M:%S"


def _looks_iso(value: str) -> bool:
    return "T" in value or ("-" in value and "." not in value)


def parse_api_datetime(value: Any) -> Optional[datetime]:
    """Parse an API timestamp.

    The API emits both ISO 8601 (``2025-01-25T18:30:46.000+00:00``) and
    ``DD.MM.YYYY HH:mm:ss`` (``24.11.2025 13:27:46``). Returns ``None`` for
    empty or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    s = value.strip()
    if _looks_iso(s):
        try:
            # fromisoformat rejects a trailing Z before 3.11
            return datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            pass

    try:
        return datetime.strptime(s, API_DATETIME_FORMAT)
    except ValueError:
        return None


def format_api_datetime(value: datetime) -> str:
    return value.strftime(API_DATETIME_FORMAT)
