from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import DomainError
from ..mail.service import MailService
from .store import OtpStore, generate_otp

logger = logging.getLogger(__name__)


class OtpService:
    """Use case: mail a one-time code and check it once."""

    def __init__(self, store: OtpStore, mail: MailService, *, debug: bool = False):
        self._store = store
        self._mail = mail
        self._debug = debug

    def request_code(self, email: str) -> bool:
        email = require_non_empty(email, "Email")
        self._store.purge_expired()

        code = generate_otp()
        self._store.put(email, code)
        try:
            self._mail.send_otp(email, code, ttl_minutes=int(self._store.ttl_seconds // 60))
        except DomainError as exc:
            logger.error("Error sending OTP email to %s: %s", email, exc, exc_info=self._debug)
            return False
        return True

    def verify(self, email: str, code: str) -> bool:
        email = require_non_empty(email, "Email")
        code = require_non_empty(code, "OTP")
        return self._store.verify(email, code)
