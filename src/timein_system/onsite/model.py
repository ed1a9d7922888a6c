from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..core.enums import RosterStatus
from ..core.exceptions import ValidationError


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_minutes(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        raise ValidationError("lateMinutes must be a number") from None


@dataclass(frozen=True)
class RosterEntry:
    """One employee line of the onsite roster as submitted by the admin."""

    employee_name: str
    email: str
    status: RosterStatus
    remarks: str = ""
    late_minutes: int = 0

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "RosterEntry":
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid employee data")

        if _as_bool(data.get("present")):
            status = RosterStatus.PRESENT
        elif _as_bool(data.get("late")):
            status = RosterStatus.LATE
        elif _as_bool(data.get("leave")):
            status = RosterStatus.LEAVE
        else:
            status = RosterStatus.ABSENT

        return cls(
            employee_name=str(data.get("employeeName") or "").strip(),
            email=str(data.get("email") or "").strip(),
            status=status,
            remarks=str(data.get("remarks") or ""),
            late_minutes=_as_minutes(data.get("lateMinutes")) if status == RosterStatus.LATE else 0,
        )

    def to_row(self) -> tuple:
        return (self.employee_name, self.email, self.status.value, self.late_minutes, self.remarks)


@dataclass(frozen=True)
class RosterStats:
    total: int
    present: int
    late: int
    leave: int
    absent: int

    @classmethod
    def of(cls, entries: Sequence[RosterEntry]) -> "RosterStats":
        def count(status: RosterStatus) -> int:
            return sum(1 for e in entries if e.status == status)

        return cls(
            total=len(entries),
            present=count(RosterStatus.PRESENT),
            late=count(RosterStatus.LATE),
            leave=count(RosterStatus.LEAVE),
            absent=count(RosterStatus.ABSENT),
        )

    def to_json(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "leave": self.leave,
            "absent": self.absent,
        }


@dataclass(frozen=True)
class RosterSubmissionResult:
    records_processed: int
    timestamp: str
    stats: RosterStats
    late_notifications_sent: int
    late_employees_total: int

    def to_json(self) -> dict:
        return {
            "message": "Attendance submitted successfully",
            "recordsProcessed": self.records_processed,
            "timestamp": self.timestamp,
            "stats": self.stats.to_json(),
            "lateNotificationsSent": self.late_notifications_sent,
            "lateEmployeesTotal": self.late_employees_total,
        }
