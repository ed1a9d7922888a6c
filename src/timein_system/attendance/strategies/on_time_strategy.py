from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Time-in at or before the end of the grace window."""

    def decide_time_in(self, *, now: datetime, today: date, shift: Shift) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
