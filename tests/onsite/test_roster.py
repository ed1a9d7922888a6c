from __future__ import annotations

import csv
import io
from datetime import datetime

import pytest

from timein_system.core.enums import LoginStep, RosterStatus
from timein_system.core.exceptions import AuthenticationError, ConfigurationError, ValidationError
from timein_system.mail.backends import MemoryMailBackend
from timein_system.mail.service import MailService
from timein_system.onsite.model import RosterEntry, RosterStats
from timein_system.onsite.roster_repository import CsvRosterRepository
from timein_system.onsite.service import OnsiteAttendanceService, OnsiteLoginService
from timein_system.otp.service import OtpService
from timein_system.otp.store import OtpStore
from timein_system.shifts.model import Shift

SUBMITTED_AT = datetime(2026, 2, 2, 10, 30)

EMPLOYEES = [
    {"employeeName": "Ana", "email": "ana@example.com", "present": True},
    {"employeeName": "Ben", "email": "ben@example.com", "late": True, "lateMinutes": 65},
    {"employeeName": "Cy", "email": "", "late": "true", "lateMinutes": "10"},
    {"employeeName": "Dee", "email": "dee@example.com", "leave": True, "remarks": "Sick"},
    {"employeeName": "Eve", "email": "eve@example.com"},
]


def make_mail(backend, admin_email="admin@example.com"):
    return MailService(backend, admin_email=admin_email, shift=Shift.from_config("09:00", "18:00"))


def make_service(backend, *, admin_email="admin@example.com", sender_email="noreply@example.com"):
    return OnsiteAttendanceService(
        make_mail(backend, admin_email),
        sender_email=sender_email,
        clock=lambda: SUBMITTED_AT,
    )


def test_status_precedence():
    entry = RosterEntry.from_payload({"employeeName": "Ana", "present": True, "late": True, "lateMinutes": 20})
    assert entry.status == RosterStatus.PRESENT
    assert entry.late_minutes == 0

    assert RosterEntry.from_payload({"late": True, "leave": True}).status == RosterStatus.LATE
    assert RosterEntry.from_payload({"leave": "yes", "absent": True}).status == RosterStatus.LEAVE
    assert RosterEntry.from_payload({}).status == RosterStatus.ABSENT


def test_bad_late_minutes_is_rejected():
    with pytest.raises(ValidationError):
        RosterEntry.from_payload({"late": True, "lateMinutes": "soon"})


def test_stats():
    stats = RosterStats.of([RosterEntry.from_payload(e) for e in EMPLOYEES])

    assert stats.to_json() == {"total": 5, "present": 1, "late": 2, "leave": 1, "absent": 1}


def test_submit_sends_late_notices_and_report():
    backend = MemoryMailBackend()
    service = make_service(backend)

    result = service.submit(EMPLOYEES, submitted_by="clerk@example.com")

    body = result.to_json()
    assert body["recordsProcessed"] == 5
    assert body["lateNotificationsSent"] == 1
    assert body["lateEmployeesTotal"] == 2
    assert body["timestamp"] == "Monday, February 2, 2026 at 10:30:00 AM"

    notices = [m for m in backend.outbox if m.subject == "Attendance Notification Late Arrival"]
    (notice,) = notices
    assert notice.to == ["ben@example.com"]
    assert "1 hour and 5 minutes" in notice.html_body
    assert "7:05 PM" in notice.html_body

    (report,) = [m for m in backend.outbox if m.subject == "Onsite Attendance Report - 2026-02-02"]
    assert report.to == ["admin@example.com"]
    (attachment,) = report.attachments
    assert attachment.name == "attendance-2026-02-02.csv"
    rows = list(csv.reader(io.StringIO(attachment.content.decode("utf-8"))))
    assert rows[0] == ["Employee Name", "Email", "Status", "Late Minutes", "Remarks"]
    assert rows[2] == ["Ben", "ben@example.com", "Late", "65", ""]
    assert rows[4] == ["Dee", "dee@example.com", "Leave", "0", "Sick"]
    assert "clerk@example.com" in report.html_body


def test_submit_requires_a_list():
    with pytest.raises(ValidationError):
        make_service(MemoryMailBackend()).submit({"employeeName": "Ana"})


def test_submit_without_admin_email():
    with pytest.raises(ConfigurationError):
        make_service(MemoryMailBackend(), admin_email=None).submit(EMPLOYEES[:1])


def test_submit_without_sender_email():
    with pytest.raises(ConfigurationError):
        make_service(MemoryMailBackend(), sender_email=None).submit(EMPLOYEES[:1])


@pytest.fixture
def login_setup():
    backend = MemoryMailBackend()
    store = OtpStore(ttl_seconds=600)
    login = OnsiteLoginService(
        OtpService(store, make_mail(backend)),
        admin_email="admin@example.com",
        admin_password="admin-pass",
        user_password="user-pass",
    )
    return login, store, backend


def test_admin_goes_straight_to_attendance(login_setup):
    login, _, backend = login_setup

    assert login.login("Admin@Example.com", "admin-pass") == LoginStep.ATTENDANCE
    assert backend.outbox == []


def test_user_gets_otp_mailed_to_admin(login_setup):
    login, store, backend = login_setup

    assert login.login("clerk@example.com", "user-pass") == LoginStep.OTP
    assert store.get("admin@example.com") is not None
    assert backend.outbox[0].to == ["admin@example.com"]


@pytest.mark.parametrize(
    "email,password",
    [("admin@example.com", "user-pass"), ("clerk@example.com", "admin-pass"), ("clerk@example.com", "nope")],
)
def test_wrong_password(login_setup, email, password):
    login, _, _ = login_setup

    with pytest.raises(AuthenticationError):
        login.login(email, password)


def test_missing_credentials(login_setup):
    login, _, _ = login_setup

    with pytest.raises(ValidationError, match="Please enter email and password"):
        login.login("", "user-pass")


def test_roster_repository_lists_employees(tmp_path):
    path = tmp_path / "Attendance.csv"
    path.write_text("Name,Email\nAna Cruz, ana@example.com \n,\nBen,ben@example.com\n", encoding="utf-8")
    repo = CsvRosterRepository(path)

    assert [(e.employee_name, e.email) for e in repo.list_employees()] == [
        ("Ana Cruz", "ana@example.com"),
        ("Ben", "ben@example.com"),
    ]
    assert CsvRosterRepository(tmp_path / "missing.csv").read_text() is None
