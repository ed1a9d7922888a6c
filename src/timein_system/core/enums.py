from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Time-in status written to the ledger and returned to the form."""

    ON_TIME = "On Time"
    LATE = "Late"


class RosterStatus(str, Enum):
    """Status an admin records for an employee on the onsite roster."""

    PRESENT = "Present"
    LATE = "Late"
    LEAVE = "Leave"
    ABSENT = "Absent"


class LoginStep(str, Enum):
    """Next screen of the onsite tool after a password login."""

    OTP = "otp"
    ATTENDANCE = "attendance"
