from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Protocol

from .model import TimeInRecord


class TimeInRepository(Protocol):
    """Ledger interface for time-in rows.

    The service depends on this interface, not on the flat-file layout.
    """

    @property
    def path(self) -> Path:
        raise NotImplementedError

    def has_entry(self, email: str, work_date: date) -> bool:
        raise NotImplementedError

    def append(self, record: TimeInRecord) -> tuple[str, ...]:
        raise NotImplementedError
