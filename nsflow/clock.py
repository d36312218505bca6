"""Wall-clock helpers for timing a simulation run."""

from __future__ import annotations

import time

_NS_PER_SECOND = 1_000_000_000


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


class Clock:
    """Measures time elapsed since construction."""

    def __init__(self) -> None:
        self._start = time.perf_counter_ns()

    def elapsed(self) -> int:
        """Return nanoseconds elapsed since the clock was created."""
        return time.perf_counter_ns() - self._start

    def date(self) -> str:
        """Return the current local date and time in ctime form."""
        return time.ctime().replace("\n", "")

    @staticmethod
    def sleep(msec: int) -> None:
        """Block for ``msec`` milliseconds."""
        time.sleep(msec / 1000)

    @staticmethod
    def format_hms(t: int) -> str:
        """Format a duration in nanoseconds as HH:MM:SS."""
        t = int(t)
        hours = _trunc_div(t, 3600 * _NS_PER_SECOND)
        t -= hours * 3600 * _NS_PER_SECOND
        minutes = _trunc_div(t, 60 * _NS_PER_SECOND)
        t -= minutes * 60 * _NS_PER_SECOND
        seconds = _trunc_div(t, _NS_PER_SECOND)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"