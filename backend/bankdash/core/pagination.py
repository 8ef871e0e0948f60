"""Paginated response envelope shared by the live and mock adapters.

The banking backend wraps list responses in a Spring-style page object.
Both adapters return exactly this shape so dashboard code never has to
check where the data came from.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from bankdash.core.errors import DomainError

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10

ENVELOPE_FIELDS = frozenset({
    "content",
    "totalElements",
    "totalPages",
    "size",
    "number",
    "numberOfElements",
    "first",
    "last",
    "empty",
})


def paginate(
    items: Sequence[dict[str, Any]],
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> dict[str, Any]:
    """Slice ``items`` into a page envelope.

    Args:
        items: Full, already filtered and ordered result set.
        page: Zero-based page number.
        size: Page size, must be positive.

    Returns:
        Dict with ``content``, ``totalElements``, ``totalPages``, ``size``,
        ``number`` plus the ``numberOfElements``/``first``/``last``/``empty``
        flags the backend also sends.

    Raises:
        DomainError: 400 when page is negative or size is not positive.
    """
    if page < 0:
        raise DomainError(f"Page index must not be negative (got {page})", 400)
    if size <= 0:
        raise DomainError(f"Page size must be positive (got {size})", 400)

    total = len(items)
    total_pages = math.ceil(total / size) if total else 0
    start = page * size
    content = [dict(item) for item in items[start:start + size]]

    return {
        "content": content,
        "totalElements": total,
        "totalPages": total_pages,
        "size": size,
        "number": page,
        "numberOfElements": len(content),
        "first": page == 0,
        "last": page >= total_pages - 1,
        "empty": not content,
    }


def as_page(
    payload: Any,
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> dict[str, Any]:
    """Normalize a backend payload into a page envelope.

    Some backend endpoints return a bare JSON array instead of a page.
    Arrays are treated as the complete result set and paginated locally;
    payloads that already carry ``content`` pass through unchanged.
    """
    if isinstance(payload, list):
        return paginate(payload, page, size)
    if isinstance(payload, dict) and "content" in payload:
        return payload
    raise TypeError(f"Cannot build a page envelope from {type(payload).__name__}")


def is_page(payload: Any) -> bool:
    """True when ``payload`` carries every envelope field."""
    return isinstance(payload, dict) and ENVELOPE_FIELDS <= payload.keys()
