from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..common.datetime_utils import parse_clock


@dataclass(frozen=True)
class Shift:
    """The fixed office shift every time-in is measured against."""

    shift_name: str
    start_time: time
    end_time: time

    @classmethod
    def from_config(cls, start: str | time, end: str | time, *, name: str = "Regular") -> "Shift":
        return cls(shift_name=name, start_time=parse_clock(start), end_time=parse_clock(end))

    def starts_at(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.start_time)

    def ends_at(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.end_time)

    def extended_end(self, work_date: date, late_minutes: int) -> datetime:
        return self.ends_at(work_date) + timedelta(minutes=late_minutes)
