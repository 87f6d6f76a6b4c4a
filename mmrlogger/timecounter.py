"""Measure elapsed wall time in several units."""

from __future__ import annotations

from time import perf_counter_ns

_NS_PER_MICRO = 1_000
_NS_PER_MILLI = 1_000_000
_NS_PER_SECOND = 1_000_000_000
_NS_PER_MINUTE = 60 * _NS_PER_SECOND
_NS_PER_HOUR = 60 * _NS_PER_MINUTE


class TimeCounter:
    """Stopwatch that starts on creation; elapsed values are truncated integers."""

    def __init__(self) -> None:
        self._begin = perf_counter_ns()

    def reset(self) -> None:
        """Restart the measurement from now."""
        self._begin = perf_counter_ns()

    def _elapsed_ns(self) -> int:
        return perf_counter_ns() - self._begin

    def elapsed_milli(self) -> int:
        """Milliseconds since start or the last reset."""
        return self._elapsed_ns() // _NS_PER_MILLI

    def elapsed_micro(self) -> int:
        """Microseconds since start or the last reset."""
        return self._elapsed_ns() // _NS_PER_MICRO

    def elapsed_nano(self) -> int:
        """Nanoseconds since start or the last reset."""
        return self._elapsed_ns()

    def elapsed_seconds(self) -> int:
        """Whole seconds since start or the last reset."""
        return self._elapsed_ns() // _NS_PER_SECOND

    def elapsed_minutes(self) -> int:
        """Whole minutes since start or the last reset."""
        return self._elapsed_ns() // _NS_PER_MINUTE

    def elapsed_hours(self) -> int:
        """Whole hours since start or the last reset."""
        return self._elapsed_ns() // _NS_PER_HOUR