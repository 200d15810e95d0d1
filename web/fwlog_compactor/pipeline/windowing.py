"""
Windowing utilities.

Time-of-day values are compared at minute granularity as minutes since
midnight. The window end is start + length and is NOT wrapped past midnight,
so a window may extend beyond 24:00 and simply match nothing there.
"""

from __future__ import annotations

from datetime import time
from typing import Tuple

from ..config import TimeWindow


def minutes_of_day(t: time) -> int:
    """Minutes since midnight, seconds ignored."""
    return t.hour * 60 + t.minute


def window_bounds(window: TimeWindow) -> Tuple[int, int]:
    """Return (start, end) in minutes since midnight; both bounds inclusive."""
    start = minutes_of_day(window.start)
    return start, start + int(window.length_minutes)


def in_window(t: time, window_start: int, window_end: int) -> bool:
    """
    Return True if t is within [window_start, window_end], else False.

    Notes
    -----
    - Both bounds are inclusive: a record stamped exactly at the end minute
      belongs to the window.
    """
    m = minutes_of_day(t)
    return window_start <= m <= window_end
