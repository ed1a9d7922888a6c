from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Mapping

from .attendance.csv_time_in_repository import CsvTimeInRepository
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import TimeInService
from .attendance.uploads import ImageUploadStore
from .batch.queue import BatchEmailQueue
from .common.datetime_utils import now_local
from .mail.backends import MailBackend, build_mail_backend
from .mail.service import MailService
from .onsite.roster_repository import CsvRosterRepository
from .onsite.service import OnsiteAttendanceService, OnsiteLoginService
from .otp.service import OtpService
from .otp.store import OtpStore
from .security.access import AccessPolicy
from .shifts.model import Shift


@dataclass(frozen=True)
class Container:
    shift: Shift
    mail_backend: MailBackend
    mail_service: MailService

    time_in_repo: CsvTimeInRepository
    roster_repo: CsvRosterRepository
    uploads: ImageUploadStore
    email_queue: BatchEmailQueue
    otp_store: OtpStore

    access_policy: AccessPolicy
    time_in_service: TimeInService
    otp_service: OtpService
    onsite_login_service: OnsiteLoginService
    onsite_attendance_service: OnsiteAttendanceService


def build_container(config: Mapping) -> Container:
    data_dir = Path(config["DATA_DIR"])
    debug = bool(config.get("DEBUG", False))
    clock = partial(now_local, config["TIMEZONE"])

    shift = Shift.from_config(config["SHIFT_START"], config["SHIFT_END"])
    mail_backend = build_mail_backend(config)
    mail_service = MailService(
        mail_backend,
        admin_email=config.get("ADMIN_EMAIL") or None,
        cc_email=config.get("CC_EMAIL") or None,
        company_name=config.get("COMPANY_NAME", "Wellevate"),
        signature=config.get("NOTICE_SIGNATURE", "Office & Operations Manager"),
        shift=shift,
    )

    time_in_repo = CsvTimeInRepository(data_dir / config["TIME_IN_CSV"])
    roster_repo = CsvRosterRepository(data_dir / config["ROSTER_CSV"])
    uploads = ImageUploadStore(config["UPLOADS_DIR"], max_bytes=int(config["MAX_IMAGE_BYTES"]))
    email_queue = BatchEmailQueue(
        mail_service.send_time_in_batch,
        batch_file=data_dir / config["BATCH_CSV"],
        cleanup_paths=[time_in_repo.path],
        batch_size=int(config["QUEUE_BATCH_SIZE"]),
        max_size=int(config["QUEUE_MAX_SIZE"]),
        delay_seconds=float(config["QUEUE_DELAY_SECONDS"]),
        background_flush=bool(config.get("QUEUE_BACKGROUND_FLUSH", True)),
        debug=debug,
    )
    otp_store = OtpStore(
        ttl_seconds=float(config["OTP_TTL_SECONDS"]),
        max_attempts=int(config["OTP_MAX_ATTEMPTS"]),
    )

    access_policy = AccessPolicy(
        allowed_cidrs=config.get("ALLOWED_CIDRS", ()),
        allowed_origins=config.get("ALLOWED_ORIGINS", ()),
    )
    time_in_service = TimeInService(
        time_in_repo,
        uploads,
        email_queue,
        shift,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(),
        grace_minutes=int(config["LATE_GRACE_MINUTES"]),
    )
    otp_service = OtpService(otp_store, mail_service, debug=debug)
    onsite_login_service = OnsiteLoginService(
        otp_service,
        admin_email=config.get("ADMIN_EMAIL") or None,
        admin_password=config.get("ADMIN_PASSWORD") or None,
        user_password=config.get("USER_PASSWORD") or None,
    )
    onsite_attendance_service = OnsiteAttendanceService(
        mail_service,
        sender_email=config.get("SENDER_EMAIL") or None,
        clock=clock,
        debug=debug,
    )

    return Container(
        shift=shift,
        mail_backend=mail_backend,
        mail_service=mail_service,
        time_in_repo=time_in_repo,
        roster_repo=roster_repo,
        uploads=uploads,
        email_queue=email_queue,
        otp_store=otp_store,
        access_policy=access_policy,
        time_in_service=time_in_service,
        otp_service=otp_service,
        onsite_login_service=onsite_login_service,
        onsite_attendance_service=onsite_attendance_service,
    )
