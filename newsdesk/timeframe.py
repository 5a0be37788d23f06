"""Search recency windows and relative-age formatting.

A ``Timeframe`` maps deterministically to a cutoff instant (``now - offset``)
that is sent upstream as the lower bound on article publish time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class Timeframe(str, Enum):
    """Recency window applied to an article search."""

    LAST_HOUR = "1h"
    LAST_12_HOURS = "12h"
    LAST_24_HOURS = "1d"
    LAST_7_DAYS = "7d"

    @property
    def offset(self) -> timedelta:
        return _OFFSETS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    def cutoff(self, now: datetime | None = None) -> datetime:
        """Return the earliest publish instant included by this window."""
        now = now or datetime.now(timezone.utc)
        return now - self.offset

    @classmethod
    def parse(cls, value: str | Timeframe | None) -> Timeframe:
        """Parse a user-supplied value, falling back to the last hour.

        Examples:
            >>> Timeframe.parse("7d")
            <Timeframe.LAST_7_DAYS: '7d'>
            >>> Timeframe.parse("fortnight")
            <Timeframe.LAST_HOUR: '1h'>
        """
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip())
        except ValueError:
            logger.warning("Unknown timeframe %r, using %s", value, cls.LAST_HOUR.value)
            return cls.LAST_HOUR


_OFFSETS: dict[Timeframe, timedelta] = {
    Timeframe.LAST_HOUR: timedelta(hours=1),
    Timeframe.LAST_12_HOURS: timedelta(hours=12),
    Timeframe.LAST_24_HOURS: timedelta(days=1),
    Timeframe.LAST_7_DAYS: timedelta(days=7),
}

_LABELS: dict[Timeframe, str] = {
    Timeframe.LAST_HOUR: "Last hour",
    Timeframe.LAST_12_HOURS: "Last 12h",
    Timeframe.LAST_24_HOURS: "Last 24h",
    Timeframe.LAST_7_DAYS: "Last week",
}


def format_cutoff(instant: datetime) -> str:
    """Format *instant* as the ISO-8601 UTC string GNews expects."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_time_ago(then: datetime, now: datetime | None = None) -> str:
    """Render the age of *then* as ``"42s ago"``, ``"5m ago"``, ``"3h ago"`` or ``"2d ago"``."""
    now = now or datetime.now(timezone.utc)
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"
