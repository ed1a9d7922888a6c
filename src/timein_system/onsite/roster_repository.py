from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Employee:
    employee_name: str
    email: str


class CsvRosterRepository:
    """Employee roster maintained by hand as ``Name,Email`` rows."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_text(self) -> Optional[str]:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def list_employees(self) -> list[Employee]:
        text = self.read_text()
        if not text:
            return []
        reader = csv.reader(io.StringIO(text))
        next(reader, None)
        return [
            Employee(employee_name=row[0].strip(), email=row[1].strip())
            for row in reader
            if len(row) >= 2 and row[0].strip()
        ]
