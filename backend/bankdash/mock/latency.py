"""latency.py — Network-like timing for mock responses.

Every mock call goes through one of these two helpers, so mock latency
matches across operations and loading spinners behave as they do against
the real backend. The sleep function is injectable; tests pass a no-op.
"""

from __future__ import annotations

import asyncio
import copy
from typing import NoReturn, TypeVar

from bankdash.core.errors import DomainError
from bankdash.core.protocols import Sleep

T = TypeVar("T")


async def delay(value: T, ms: float, *, sleep: Sleep = asyncio.sleep) -> T:
    """Resolve with a deep copy of ``value`` after ``ms`` milliseconds.

    The copy keeps callers from mutating the mock backend's state through
    a returned object.
    """
    if ms > 0:
        await sleep(ms / 1000)
    return copy.deepcopy(value)


async def delayed_error(
    message: str,
    status: int,
    *,
    ms: float = 0,
    sleep: Sleep = asyncio.sleep,
) -> NoReturn:
    """Raise a simulated ``DomainError`` after ``ms`` milliseconds."""
    if ms > 0:
        await sleep(ms / 1000)
    raise DomainError(message, status)
