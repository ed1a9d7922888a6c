from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late time-in; minutes are counted from the shift start, not the grace limit."""

    def decide_time_in(self, *, now: datetime, today: date, shift: Shift) -> StatusDecision:
        late_seconds = (now - shift.starts_at(today)).total_seconds()
        return StatusDecision(status=AttendanceStatus.LATE, late_minutes=max(int(late_seconds // 60), 0))
