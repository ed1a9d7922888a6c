from __future__ import annotations

import csv
import threading
from datetime import date
from pathlib import Path

from ..common.csv_utils import sanitize_cell
from ..core.constants import TIME_IN_CSV_HEADER
from .model import TimeInRecord
from .repository import TimeInRepository

EMAIL_COLUMN = 1
DATE_COLUMN = 2


class CsvTimeInRepository(TimeInRepository):
    """Append-only time-in ledger kept in a flat CSV file.

    Note: The file is deleted by the batch queue after a successful flush,
    so it only holds rows that have not been mailed yet.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_file(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            with self._path.open("w", newline="", encoding="utf-8") as fh:
                csv.writer(fh, quoting=csv.QUOTE_ALL).writerow(TIME_IN_CSV_HEADER)

    def has_entry(self, email: str, work_date: date) -> bool:
        wanted_email = sanitize_cell(email.lower())
        wanted_date = work_date.strftime("%Y-%m-%d")
        with self._lock:
            if not self._path.exists():
                return False
            with self._path.open("r", newline="", encoding="utf-8") as fh:
                reader = csv.reader(fh)
                next(reader, None)
                for row in reader:
                    if len(row) > DATE_COLUMN and row[EMAIL_COLUMN] == wanted_email and row[DATE_COLUMN] == wanted_date:
                        return True
        return False

    def append(self, record: TimeInRecord) -> tuple[str, ...]:
        row = tuple(sanitize_cell(cell) for cell in record.to_row())
        with self._lock:
            self._ensure_file()
            with self._path.open("a", newline="", encoding="utf-8") as fh:
                csv.writer(fh, quoting=csv.QUOTE_ALL).writerow(row)
        return row
