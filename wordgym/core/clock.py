"""
Clock abstraction.

The scheduler and session engine never read the wall clock directly;
callers inject a Clock (SystemClock in production, a manual clock in tests).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Timezone-aware UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)
