"""Timestamp helpers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

Clock = Callable[[], str]


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string in UTC
    """
    return datetime.now(UTC).isoformat()


class FixedClock:
    """Clock that starts at a fixed instant and advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> str:
        value = self.current.isoformat()
        self.current += timedelta(seconds=1)
        return value
