from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..shifts.model import Shift
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: pick the time-in strategy from the clock and the shift."""

    def for_time_in(self, *, now: datetime, today: date, shift: Shift, grace_minutes: int) -> AttendanceStrategy:
        if now <= shift.starts_at(today) + timedelta(minutes=grace_minutes):
            return OnTimeStrategy()
        return LateStrategy()
