from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.csv_utils import render_csv
from ..common.datetime_utils import format_date, format_long_timestamp
from ..core.constants import ROSTER_REPORT_CSV_HEADER
from ..core.enums import LoginStep, RosterStatus
from ..core.exceptions import AuthenticationError, ConfigurationError, DomainError, ValidationError
from ..mail.service import MailService
from ..otp.service import OtpService
from .model import RosterEntry, RosterStats, RosterSubmissionResult

logger = logging.getLogger(__name__)

MAX_NOTICE_WORKERS = 4


class OnsiteLoginService:
    """Password step of the onsite tool.

    The admin goes straight to the roster; everybody else needs the OTP that
    is mailed to the admin inbox.
    """

    def __init__(
        self,
        otp: OtpService,
        *,
        admin_email: Optional[str],
        admin_password: Optional[str],
        user_password: Optional[str],
    ):
        self._otp = otp
        self._admin_email = admin_email
        self._admin_password = admin_password
        self._user_password = user_password

    @property
    def admin_email(self) -> Optional[str]:
        return self._admin_email

    def login(self, email: str, password: str) -> LoginStep:
        if not email or not password:
            raise ValidationError("Please enter email and password")
        if not self._admin_email:
            raise ConfigurationError("Admin email not configured")

        if email.strip().lower() == self._admin_email.lower():
            if not self._admin_password or password != self._admin_password:
                raise AuthenticationError("Invalid password")
            return LoginStep.ATTENDANCE

        if not self._user_password or password != self._user_password:
            raise AuthenticationError("Invalid password")
        if not self._otp.request_code(self._admin_email):
            raise DomainError("Failed to send OTP email")
        return LoginStep.OTP


class OnsiteAttendanceService:
    """Use case: admin submits the day's onsite roster."""

    def __init__(
        self,
        mail: MailService,
        *,
        sender_email: Optional[str],
        clock: Callable[[], datetime],
        debug: bool = False,
    ):
        self._mail = mail
        self._sender_email = sender_email
        self._clock = clock
        self._debug = debug

    def parse_entries(self, employees: Any) -> list[RosterEntry]:
        if not isinstance(employees, list):
            raise ValidationError("Invalid employee data")
        return [RosterEntry.from_payload(item) for item in employees]

    def submit(self, employees: Any, *, submitted_by: Optional[str] = None, now: datetime | None = None) -> RosterSubmissionResult:
        entries = self.parse_entries(employees)
        now = now or self._clock()
        report_date = format_date(now)
        timestamp = format_long_timestamp(now)

        late = [e for e in entries if e.status == RosterStatus.LATE]
        sent = self._notify_late(late, now=now)
        logger.info("Late notifications: %s/%s sent successfully", sent, len(late))

        if not self._mail.admin_email:
            raise ConfigurationError("Admin email not configured")
        if not self._sender_email:
            raise ConfigurationError("Sender email not configured")

        stats = RosterStats.of(entries)
        self._mail.send_roster_report(
            csv_content=render_csv(ROSTER_REPORT_CSV_HEADER, (e.to_row() for e in entries)),
            report_date=report_date,
            timestamp=timestamp,
            submitted_by=submitted_by,
            stats=stats.to_json(),
            late_notified=sent,
            late_total=len(late),
        )
        logger.info(
            "Attendance submitted: records=%s submitted_by=%s stats=%s",
            len(entries),
            submitted_by,
            stats.to_json(),
        )
        return RosterSubmissionResult(
            records_processed=len(entries),
            timestamp=timestamp,
            stats=stats,
            late_notifications_sent=sent,
            late_employees_total=len(late),
        )

    def _notify_late(self, late: Sequence[RosterEntry], *, now: datetime) -> int:
        if not late:
            return 0

        def send(entry: RosterEntry) -> bool:
            if not entry.email:
                logger.warning("No email for late employee %s", entry.employee_name)
                return False
            try:
                self._mail.send_late_notice(
                    email=entry.email,
                    name=entry.employee_name,
                    late_minutes=entry.late_minutes,
                    work_date=now.date(),
                )
            except DomainError as exc:
                logger.error("Error sending late notification to %s: %s", entry.email, exc, exc_info=self._debug)
                return False
            return True

        with ThreadPoolExecutor(max_workers=min(MAX_NOTICE_WORKERS, len(late))) as pool:
            return sum(pool.map(send, late))
