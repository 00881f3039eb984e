# ==============================================================================
# Clock Abstraction
# ==============================================================================
"""
Injectable wall clock and UTC day-boundary helpers.

Repositories and the session tracker take a Clock instead of calling
datetime.now() directly so "today" filters can be exercised in tests
without waiting for real midnight.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current time as a timezone-aware UTC datetime."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time (UTC, timezone-aware)."""
        ...

    def epoch_seconds(self) -> int:
        """Return the current time as whole seconds since the Unix epoch."""
        return int(self.now().timestamp())


class SystemClock(Clock):
    """Clock backed by the server's wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def utc_day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """
    Compute the UTC calendar day containing a moment.

    Args:
        moment: Any datetime. Naive values are interpreted as UTC.

    Returns:
        Tuple of (start, end) where start is 00:00:00 UTC of that day and
        end is exactly 24 hours later. Intended as a half-open interval.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    start = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=24)
