from __future__ import annotations

from typing import Any, Dict, List


def _page(items: List[Any], total: Any, *, success: bool = True, reason: Any = None) -> Dict[str, Any]:
    return {
        "success": success,
        "reason": reason,
        "count": len(items),
        "totalCount": total if isinstance(total, int) and total > 0 else len(items),
        "data": items,
    }


def normalize_page(payload: Any) -> Dict[str, Any]:
    """
    Coerce a listing response into ``ResponseDto`` wire shape.

    Listing endpoints for users and mock results have answered with several
    shapes over time:

    - Spring ``Page`` objects (``content`` + ``totalElements``)
    - bare JSON arrays
    - ``ResponseDto`` envelopes with a list ``data``

    Anything else becomes an empty successful page.
    """
    if isinstance(payload, list):
        return _page(payload, len(payload))

    if isinstance(payload, dict):
        content = payload.get("content")
        if isinstance(content, list):
            return _page(content, payload.get("totalElements"))

        data = payload.get("data")
        if isinstance(data, list):
            return _page(
                data,
                payload.get("totalCount"),
                success=payload.get("success", True),
                reason=payload.get("reason"),
            )

        if payload.get("success") is False:
            return _page([], 0, success=False, reason=payload.get("reason"))

    return _page([], 0)
