"""Tolerant JSON helpers.

Part content is stored by the API as a JSON string, and historical records
are sometimes double encoded or hold arrays as numeric-key objects. These
helpers decode such values without raising.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from ieltsmock.core.logger import get_logger

logger = get_logger(__name__)


def safe_stringify_json(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.error(f"safe_stringify_json failed: {exc}")
        return ""


def looks_like_json(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    s = value.strip()
    return (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]"))


def safe_parse_json(value: Any) -> Any:
    """Decode ``value`` if it is a JSON-looking string, otherwise return it unchanged."""
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    s = value.strip()
    if not looks_like_json(s):
        return value
    try:
        return json.loads(s)
    except ValueError:
        logger.warning("safe_parse_json failed, returning raw string")
        return value


def _is_quoted(s: str) -> bool:
    return (s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'"))


def safe_multi_parse_json(value: Any, max_depth: int = 3) -> Any:
    """Decode up to ``max_depth`` layers of JSON encoding.

    Handles raw JSON text as well as a JSON string literal wrapping JSON text
    (``"{\\"a\\": 1}"``). Stops at the first layer that makes no progress.
    """
    current = value
    for _ in range(max_depth):
        if not isinstance(current, str):
            break
        s = current.strip()

        if looks_like_json(s):
            try:
                current = json.loads(s)
                continue
            except ValueError:
                pass

        if _is_quoted(s):
            try:
                unwrapped = json.loads(s)
            except ValueError:
                # single quotes are not JSON; cannot unwrap
                break
            if isinstance(unwrapped, str) and looks_like_json(unwrapped):
                try:
                    current = json.loads(unwrapped)
                except ValueError:
                    current = unwrapped
                continue
            current = unwrapped
            continue

        break
    return current


def normalize_array(value: Any) -> List[Any]:
    """Return ``value`` as a list: JSON strings are decoded, dicts yield their values."""
    result = safe_multi_parse_json(value)
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        return list(result.values())
    return []


def first_present(mapping: Optional[dict], *keys: str) -> Any:
    """Return the first truthy value among ``keys`` in ``mapping``."""
    if not mapping:
        return None
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return None
