"""
Cargo ERP Core Time — Explicit Clock Protocol
===============================================
Doctrine: NO datetime.now() inside rule logic.

Calculators take an explicit reference date. Planning helpers that
stamp timestamps (sent_at, paid_at, released_at, ...) receive a Clock.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover

    def today(self) -> date:
        """Return the current calendar date."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock backed by real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return date.today()


class FixedClock:
    """
    Test clock that returns a fixed timestamp.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        assert clock.today() == date(2025, 1, 1)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt.astimezone(timezone.utc)

    def today(self) -> date:
        return self._fixed_dt.date()
