"""
Module 03 - Vesting Calculator
Linear vesting arithmetic over integer base units.

Owner: Protocol Engineer
Module ID: M03

vested = total * (now - start) // (end - start), clamped to total once
now >= end. The multiplication happens before the division so the only
rounding is a single floor; no floating point is ever involved.
"""
from __future__ import annotations

from core.schemas.errors import InvalidWindowException, NotYetStartedException
from core.schemas.window import VestingWindow


def vested_amount(total: int, start: int, end: int, now: int) -> int:
    """
    Portion of `total` unlocked by `now`.

    Raises:
        InvalidWindowException: If end <= start
        NotYetStartedException: If now < start

    Example:
        >>> vested_amount(100 * 10**18, 0, 730 * 86400, 90 * 86400)
        12328767123287671232
    """
    if end <= start:
        raise InvalidWindowException(start, end)
    if now < start:
        raise NotYetStartedException(start, now)

    vested = total * (now - start) // (end - start)
    return min(vested, total)


def claimable(window: VestingWindow, already_migrated: int, now: int) -> int:
    """
    What the window may still release at `now`.

    Never negative, even if `already_migrated` somehow exceeds the
    vested amount.
    """
    vested = vested_amount(
        window.total_amount,
        window.window_start,
        window.window_end,
        now,
    )
    return max(vested - already_migrated, 0)


__all__ = [
    "vested_amount",
    "claimable",
]
