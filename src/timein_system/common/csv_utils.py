from __future__ import annotations

import csv
import io
import re
from typing import Iterable, Sequence

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_FORMULA_PREFIXES = ("=", "+", "-", "@")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9@._-]", re.IGNORECASE)


def sanitize_cell(value: object) -> str:
    """Neutralise spreadsheet formulas and strip control characters.

    Quoting is left to the csv writer.
    """
    text = str(value)
    if text.startswith(_FORMULA_PREFIXES):
        text = "'" + text
    return _CONTROL_CHARS.sub("", text)


def sanitize_filename_part(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", value)


def render_csv(header: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([sanitize_cell(cell) for cell in row])
    return out.getvalue()
