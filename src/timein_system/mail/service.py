from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from ..shifts.model import Shift
from .backends import MailBackend
from .message import Attachment, EmailMessage

logger = logging.getLogger(__name__)


def format_duration(minutes: int) -> str:
    """65 -> '1 hour and 5 minutes'."""
    hours, mins = divmod(max(int(minutes), 0), 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour{'s' if hours != 1 else ''}")
    if mins or not hours:
        parts.append(f"{mins} minute{'s' if mins != 1 else ''}")
    return " and ".join(parts)


def clock_label(value: Optional[datetime | time]) -> str:
    return value.strftime("%I:%M %p").lstrip("0") if value else ""


class MailService:
    """Builds every outbound email of the app and hands it to the backend."""

    def __init__(
        self,
        backend: MailBackend,
        *,
        admin_email: Optional[str],
        cc_email: Optional[str] = None,
        company_name: str = "Wellevate",
        signature: str = "Office & Operations Manager",
        shift: Optional[Shift] = None,
    ):
        self._backend = backend
        self._admin_email = admin_email
        self._cc_email = cc_email
        self._company = company_name
        self._signature = signature
        self._shift = shift
        self._templates = Environment(
            loader=PackageLoader("timein_system", "templates/email"),
            autoescape=select_autoescape(["html"]),
        )
        self._templates.filters["clock"] = clock_label

    @property
    def backend(self) -> MailBackend:
        return self._backend

    @property
    def admin_email(self) -> Optional[str]:
        return self._admin_email

    def _render(self, template: str, **context) -> str:
        return self._templates.get_template(template).render(company=self._company, **context)

    def send_time_in_batch(self, csv_path: str | Path, image_paths: Iterable[str | Path] = ()) -> None:
        attachments = [Attachment.from_path(csv_path, content_type="text/csv")]
        attachments.extend(Attachment.from_path(p) for p in image_paths)
        self._backend.send(
            EmailMessage(
                subject="WFH Time-In Report",
                html_body=self._render("time_in_report.html", image_count=len(attachments) - 1),
                to=[self._admin_email] if self._admin_email else [],
                cc=[self._cc_email] if self._cc_email else [],
                attachments=attachments,
            )
        )

    def send_otp(self, recipient: str, code: str, *, ttl_minutes: int) -> None:
        self._backend.send(
            EmailMessage(
                subject=f"Your OTP for {self._company} Onsite Time In",
                html_body=self._render("otp.html", code=code, ttl_minutes=ttl_minutes),
                to=[recipient],
                save_to_sent_items=False,
            )
        )
        logger.info("OTP email sent to %s", recipient)

    def send_late_notice(self, *, email: str, name: str, late_minutes: int, work_date: date) -> None:
        arrived_at = log_off_at = None
        if self._shift is not None:
            arrived_at = self._shift.starts_at(work_date) + timedelta(minutes=late_minutes)
            log_off_at = self._shift.extended_end(work_date, late_minutes)
        self._backend.send(
            EmailMessage(
                subject="Attendance Notification Late Arrival",
                html_body=self._render(
                    "late_notice.html",
                    name=name,
                    late_minutes=late_minutes,
                    duration=format_duration(late_minutes),
                    shift_start=self._shift.start_time if self._shift else None,
                    arrived_at=arrived_at,
                    log_off_at=log_off_at,
                    signature=self._signature,
                ),
                to=[email],
            )
        )
        logger.info("Late notification sent to %s (%s) - %s extension", name, email, format_duration(late_minutes))

    def send_roster_report(
        self,
        *,
        csv_content: str,
        report_date: str,
        timestamp: str,
        submitted_by: Optional[str],
        stats: dict,
        late_notified: int,
        late_total: int,
    ) -> None:
        self._backend.send(
            EmailMessage(
                subject=f"Onsite Attendance Report - {report_date}",
                html_body=self._render(
                    "onsite_report.html",
                    timestamp=timestamp,
                    submitted_by=submitted_by or "System",
                    stats=stats,
                    late_notified=late_notified,
                    late_total=late_total,
                ),
                to=[self._admin_email] if self._admin_email else [],
                attachments=[
                    Attachment(
                        name=f"attendance-{report_date}.csv",
                        content=csv_content.encode("utf-8"),
                        content_type="text/csv",
                    )
                ],
            )
        )
