from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, Optional

from ..batch.queue import BatchEmailQueue
from ..common.datetime_utils import format_clock_12h, format_date
from ..common.validators import require_email, require_max_length
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, MAX_NAME_LENGTH
from ..core.exceptions import DuplicateSubmissionError, QueueFullError, ValidationError
from ..shifts.model import Shift
from .factory import AttendanceStrategyFactory
from .model import TimeInRecord, TimeInResult, TimeInSubmission
from .repository import TimeInRepository
from .uploads import ImageUploadStore

logger = logging.getLogger(__name__)


class TimeInService:
    """Use case: record one WFH time-in per employee per day."""

    def __init__(
        self,
        ledger: TimeInRepository,
        uploads: ImageUploadStore,
        queue: BatchEmailQueue,
        shift: Shift,
        *,
        clock: Callable[[], datetime],
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._ledger = ledger
        self._uploads = uploads
        self._queue = queue
        self._shift = shift
        self._clock = clock
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

        self._guard = threading.Lock()
        self._in_flight: set[str] = set()
        # The ledger is deleted after each mailed batch; this keeps the day's
        # keys so a second time-in is still refused afterwards.
        self._recorded_day: Optional[date] = None
        self._recorded: set[str] = set()

    def submit(self, submission: TimeInSubmission, *, now: datetime | None = None) -> TimeInResult:
        if not submission.name or not submission.name.strip() or not submission.email or not submission.email.strip():
            raise ValidationError("Name and email required")
        name = require_max_length(submission.name.strip(), "Name", MAX_NAME_LENGTH)
        email = require_email(submission.email.strip()).lower()

        now = now or self._clock()
        today = now.date()
        strategy = self._factory.for_time_in(now=now, today=today, shift=self._shift, grace_minutes=self._grace_minutes)
        decision = strategy.decide_time_in(now=now, today=today, shift=self._shift)

        key = f"{email}-{format_date(now)}"
        self._acquire(key, today)
        try:
            if self._ledger.has_entry(email, today):
                raise DuplicateSubmissionError("Already timed in today")

            image = None
            if submission.attachment is not None and submission.attachment.filename:
                image = self._uploads.validate(submission.attachment)

            # The slot is held before the ledger write, so a full queue
            # rejects the request with nothing written.
            try:
                self._queue.reserve()
            except QueueFullError:
                raise QueueFullError("System busy, please try again later") from None

            enqueued = False
            try:
                record = TimeInRecord(
                    name=name,
                    email=email,
                    work_date=today,
                    time_in=format_clock_12h(now),
                    status=decision.status,
                    ip_address=submission.client_ip or "",
                )
                row = self._ledger.append(record)
                image_path = self._uploads.save(image, owner_email=email) if image else None
                self._queue.enqueue(row, [image_path] if image_path else [], reserved=True)
                enqueued = True
            finally:
                if not enqueued:
                    self._queue.release()

            with self._guard:
                self._recorded.add(key)
        finally:
            with self._guard:
                self._in_flight.discard(key)

        logger.info("Time-in recorded for %s on %s (%s)", email, record.date_label, decision.status.value)
        return TimeInResult(
            status=decision.status,
            time_in=record.time_in,
            date=record.date_label,
            late_minutes=decision.late_minutes,
        )

    def _acquire(self, key: str, today: date) -> None:
        with self._guard:
            if self._recorded_day != today:
                self._recorded_day = today
                self._recorded.clear()
            if key in self._in_flight:
                raise DuplicateSubmissionError("Duplicate request")
            if key in self._recorded:
                raise DuplicateSubmissionError("Already timed in today")
            self._in_flight.add(key)
