from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import DEFAULT_OTP_MAX_ATTEMPTS, DEFAULT_OTP_TTL_SECONDS, OTP_LENGTH


def generate_otp(length: int = OTP_LENGTH) -> str:
    """Random numeric code without a leading zero (100000-999999 for 6 digits)."""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


@dataclass
class OtpRecord:
    code: str
    email: str
    expires_at: float
    attempts: int = 0


class OtpStore:
    """Process-local OTP map keyed by lower-cased email.

    Codes are single use: a successful or expired check removes the record.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_OTP_TTL_SECONDS,
        max_attempts: int = DEFAULT_OTP_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = float(ttl_seconds)
        self._max_attempts = int(max_attempts)
        self._clock = clock
        self._records: dict[str, OtpRecord] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def put(self, email: str, code: str) -> OtpRecord:
        record = OtpRecord(code=code, email=email, expires_at=self._clock() + self._ttl)
        with self._lock:
            self._records[email.lower()] = record
        return record

    def get(self, email: str) -> Optional[OtpRecord]:
        with self._lock:
            return self._records.get(email.lower())

    def verify(self, email: str, code: str) -> bool:
        key = email.lower()
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return False
            if self._clock() > record.expires_at:
                del self._records[key]
                return False
            if not secrets.compare_digest(record.code, str(code)):
                record.attempts += 1
                if record.attempts >= self._max_attempts:
                    del self._records[key]
                return False
            del self._records[key]
            return True

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, r in self._records.items() if now > r.expires_at]
            for key in expired:
                del self._records[key]
        return len(expired)
