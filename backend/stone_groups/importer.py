# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Stone-group bulk import – sheet reading and the create-or-update loop.

Sheet layout
------------
Row 1 holds the headers (matched case-insensitively after trimming):
``stonegroup_guid``, ``stonegroup_name`` (both required),
``stonegroup_shortname`` and ``is_disabled`` (optional).  Extra columns are
ignored.

A data row is matched against existing groups by GUID *or* name; a match is
updated in place, anything else is inserted.  Rows that cannot be used are
skipped and reported as ``"Row N: <reason>"`` where N is the row number as
seen in the spreadsheet (the header is row 1).  Blank rows are ignored in
both formats and are not counted.

The caller owns the transaction: ``upsert_rows`` only adds and flushes.
"""

import csv
import io
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from openpyxl import load_workbook
from sqlalchemy import or_
from sqlalchemy.orm import Session

from models.stone_group import StoneGroup

_TRUE_STRINGS = {"1", "true", "yes", "y"}


@dataclass
class ImportResult:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def total_processed(self) -> int:
        return self.inserted + self.updated + self.skipped

    def skip(self, row_number: int, reason: str) -> None:
        self.skipped += 1
        self.errors.append(f"Row {row_number}: {reason}")


def read_sheet(filename: str, raw: bytes) -> List[Sequence]:
    """
    Return every row of the first sheet as a sequence of cell values.
    ``.xlsx`` goes through openpyxl, ``.csv`` through the csv module.
    Raises ``ValueError`` if the content cannot be parsed.
    """
    if filename.lower().endswith(".csv"):
        text = raw.decode("utf-8-sig")
        return _trim_trailing([row for row in csv.reader(io.StringIO(text))])

    try:
        wb = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except Exception as exc:
        raise ValueError("Could not parse the uploaded file as .xlsx") from exc
    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            return []
        rows = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    return _trim_trailing(rows)


def _clean(value):
    return value.strip() if isinstance(value, str) else value


def _is_blank(row: Sequence) -> bool:
    return all(_clean(v) in (None, "") for v in row)


def _trim_trailing(rows: List[Sequence]) -> List[Sequence]:
    # blank rows inside the sheet stay so that row numbers match the file
    while rows and _is_blank(rows[-1]):
        rows.pop()
    return rows


def _as_text(value) -> Optional[str]:
    value = _clean(value)
    if value is None or value == "":
        return None
    return str(value)


def _as_flag(value) -> bool:
    value = _clean(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.lower() in _TRUE_STRINGS
    return False


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def upsert_rows(db: Session, rows: List[Sequence], user_id: str) -> ImportResult:
    """Apply data rows (``rows[1:]``) to the stone_groups table."""
    headers = [str(_clean(h) or "").lower() for h in rows[0]]
    result = ImportResult()

    for row_number, row in enumerate(rows[1:], start=2):
        if _is_blank(row):
            continue
        if len(row) != len(headers):
            result.skip(row_number, "Column count mismatch")
            continue

        data = dict(zip(headers, (_clean(v) for v in row)))
        guid = _as_text(data.get("stonegroup_guid"))
        name = _as_text(data.get("stonegroup_name"))

        if not guid or not name:
            result.skip(row_number, "Missing required fields (stonegroup_name or stonegroup_guid)")
            continue
        if not _is_uuid(guid):
            result.skip(row_number, "Invalid GUID format")
            continue

        values = {
            "stonegroup_guid": guid,
            "stonegroup_name": name,
            "stonegroup_shortname": _as_text(data.get("stonegroup_shortname")),
            "is_disabled": _as_flag(data.get("is_disabled")),
            "user_id": user_id,
        }

        existing = (
            db.query(StoneGroup)
            .filter(or_(StoneGroup.stonegroup_guid == guid, StoneGroup.stonegroup_name == name))
            .first()
        )
        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
            result.updated += 1
        else:
            db.add(StoneGroup(**values))
            result.inserted += 1

        # later rows of the same file must see this one
        db.flush()

    return result
