"""Fixed-delay retry helper for flaky browser waits."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from .logger import logger

T = TypeVar("T")


async def retry(
    action: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    delay: float = 5.0,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Await ``action()`` up to ``max_attempts`` times, ``delay`` seconds apart.

    The last exception is re-raised unchanged once attempts run out.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await action()
        except Exception as exc:
            remaining = max_attempts - attempt
            if remaining <= 0:
                raise
            logger.warning("Attempt %d failed (%s); retrying, %d attempts left", attempt, exc, remaining)
            await sleep(delay)
            attempt += 1


__all__ = ["retry"]
