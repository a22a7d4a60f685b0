"""Ordered fallback evaluation: the first tier that yields a value wins."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Tier = Callable[[], Awaitable[Optional[T]]]


async def first_available(
    tiers: Sequence[tuple[str, Tier[T]]],
    subject: str = "",
) -> Optional[T]:
    """Run *tiers* in order and return the first non-``None`` result.

    A tier that raises counts as yielding nothing; the error is logged at debug
    level and the next tier is attempted. Returns ``None`` when every tier misses.
    """
    for name, tier in tiers:
        try:
            value = await tier()
        except Exception as exc:
            logger.debug("%s: %s tier failed: %s", subject, name, exc)
            continue
        if value is not None:
            logger.debug("%s: resolved from %s", subject, name)
            return value
        logger.debug("%s: %s tier yielded nothing", subject, name)
    return None
