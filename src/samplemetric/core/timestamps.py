"""Timestamp rendering and elapsed-time clock faces.

Elapsed times are rendered as a time of day ("how far into the test") laid
onto a calendar date, so that a time-series tool can use them as an X axis.
Runs with a CI build number share the fixed COMPARISON_DATE, which lets
results of different builds be overlaid on one axis.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

COMPARISON_DATE = date(2017, 1, 1)

_MIDNIGHT = datetime(2000, 1, 1)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def format_millis(millis: int, pattern: str, tz: tzinfo) -> str:
    """Render a Unix timestamp in milliseconds with an strftime pattern."""
    return datetime.fromtimestamp(millis / 1000, tz).strftime(pattern)


def current_date(now_millis: int, tz: tzinfo) -> date:
    """Return the calendar date of ``now_millis`` in ``tz``."""
    return datetime.fromtimestamp(now_millis / 1000, tz).date()


@dataclass(frozen=True)
class Elapsed:
    """Whole minutes and seconds elapsed since the test started."""

    minutes: int
    seconds: int

    @classmethod
    def between(cls, start_millis: int, end_millis: int) -> "Elapsed":
        total_seconds = _trunc_div(end_millis - start_millis, 1000)
        minutes = _trunc_div(total_seconds, 60)
        return cls(minutes=minutes, seconds=total_seconds - minutes * 60)

    def clock_face(self) -> time:
        """Lay the elapsed time onto midnight.

        Minutes past 59 carry into hours; past 24 hours the day is dropped,
        so a 25 hour run reads 01:00:00.
        """
        # @tra: Core.Elapsed.DayRollover
        moment = _MIDNIGHT + timedelta(minutes=self.minutes, seconds=self.seconds)
        return moment.time()

    def render(self, anchor: date, pattern: str, tz: tzinfo) -> str:
        """Render the clock face on ``anchor`` with an strftime pattern.

        Raises:
            ValueError: If the pattern cannot be rendered.
        """
        return datetime.combine(anchor, self.clock_face(), tzinfo=tz).strftime(pattern)
