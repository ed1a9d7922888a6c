from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from werkzeug.datastructures import FileStorage

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class TimeInSubmission:
    """Raw form input for one time-in."""

    name: Optional[str]
    email: Optional[str]
    attachment: Optional[FileStorage] = None
    client_ip: Optional[str] = None


@dataclass(frozen=True)
class TimeInRecord:
    """One row of the time-in ledger."""

    name: str
    email: str
    work_date: date
    time_in: str
    status: AttendanceStatus
    ip_address: str = ""

    @property
    def date_label(self) -> str:
        return self.work_date.strftime("%Y-%m-%d")

    def to_row(self) -> tuple[str, ...]:
        return (self.name, self.email, self.date_label, self.time_in, self.status.value, self.ip_address)


@dataclass(frozen=True)
class TimeInResult:
    status: AttendanceStatus
    time_in: str
    date: str
    late_minutes: int = 0

    def to_json(self) -> dict:
        return {"status": self.status.value, "timeIn": self.time_in, "date": self.date}
