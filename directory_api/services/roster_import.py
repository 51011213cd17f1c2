"""Roster import: replace a company's persons from an uploaded spreadsheet.

Every row is validated on its own and problems are collected per row. The
roster is only replaced when the whole file is clean; otherwise storage is
left untouched and the caller gets the file back with an error column.
"""

from __future__ import annotations

import asyncio
import logging
import unicodedata
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError, ValidationError
from directory_api.repositories.company import CompanyRepository
from directory_api.repositories.person import PersonRepository
from directory_api.services.roster_export import ROSTER_COLUMNS, render_roster

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("rut", "name")
HEADER_ROW = 1

YES_VALUES = {"si", "s", "yes", "y", "true", "1", "x"}
NO_VALUES = {"no", "n", "false", "0"}


class RowInvalid(Exception):
    pass


@dataclass(frozen=True)
class RowError:
    row: int
    message: str


@dataclass(frozen=True)
class SheetRow:
    row: int
    values: dict[str, Any]


@dataclass(frozen=True)
class ImportOutcome:
    had_errors: bool
    report: bytes
    imported: int = 0
    errors: list[RowError] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------

def _normalize_text(value) -> str:
    text = " ".join(str(value or "").strip().split())
    if not text:
        return ""
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return text.casefold()


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Numeric ids typed into Excel come back as floats.
        value = int(value)
    return " ".join(str(value).split())


def _as_int(value, *, label: str) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise RowInvalid(f"'{label}' must be an integer, got {value!r}")
    try:
        decimal_value = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise RowInvalid(f"'{label}' must be an integer, got {value!r}")
    if decimal_value != decimal_value.to_integral_value():
        raise RowInvalid(f"'{label}' must be an integer, got {value!r}")
    return int(decimal_value)


def _as_bool(value, *, label: str) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    norm = _normalize_text(str(value))
    if not norm:
        return True
    if norm in YES_VALUES:
        return True
    if norm in NO_VALUES:
        return False
    raise RowInvalid(f"invalid value for '{label}': {value!r}")


def validate_row(values: dict[str, Any]) -> tuple[dict[str, Any] | None, list[str]]:
    """Coerce one sheet row into person fields.

    Returns ``(person_fields, [])`` for a valid row and ``(None, problems)``
    otherwise; all problems of the row are reported, not just the first.
    """
    problems: list[str] = []
    person: dict[str, Any] = {}

    for column in REQUIRED_COLUMNS:
        text = _as_text(values.get(column))
        if not text:
            problems.append(f"'{column}' is required")
        person[column] = text

    for column, coerce in (("card", _as_int), ("active", _as_bool)):
        try:
            person[column] = coerce(values.get(column), label=column)
        except RowInvalid as exc:
            problems.append(str(exc))

    person["type"] = _as_text(values.get("type")) or None

    if problems:
        return None, problems
    return person, []


# ---------------------------------------------------------------------------
# Workbook parsing
# ---------------------------------------------------------------------------

def parse_roster(content: bytes) -> list[SheetRow]:
    """Read the first worksheet into rows keyed by roster column.

    Header names are matched case-insensitively; unknown columns are ignored
    and fully blank rows skipped. Row numbers are the sheet's own.
    """
    wb = load_workbook(BytesIO(content), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValidationError("the spreadsheet is empty")

        index: dict[str, int] = {}
        for position, title in enumerate(header):
            key = _normalize_text(title)
            if key in ROSTER_COLUMNS and key not in index:
                index[key] = position
        missing = [c for c in REQUIRED_COLUMNS if c not in index]
        if missing:
            raise ValidationError(f"missing column(s): {', '.join(missing)}")

        parsed: list[SheetRow] = []
        for row_number, cells in enumerate(rows, start=HEADER_ROW + 1):
            if all(c is None or (isinstance(c, str) and not c.strip()) for c in cells):
                continue
            values = {
                column: cells[position] if position < len(cells) else None
                for column, position in index.items()
            }
            parsed.append(SheetRow(row=row_number, values=values))
        return parsed
    finally:
        wb.close()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class RosterImportService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._companies = CompanyRepository(session)
        self._persons = PersonRepository(session)

    async def import_roster(self, company_id: str, content: bytes) -> ImportOutcome:
        if not await self._companies.exists(company_id):
            raise NotFoundError("Company", company_id)

        sheet = await asyncio.to_thread(parse_roster, content)

        valid: list[dict[str, Any]] = []
        errors: list[RowError] = []
        annotations: list[str | None] = []
        for sheet_row in sheet:
            person, problems = validate_row(sheet_row.values)
            if person is None:
                message = f"row {sheet_row.row}: " + "; ".join(problems)
                errors.append(RowError(sheet_row.row, message))
                annotations.append(message)
            else:
                valid.append(person)
                annotations.append(None)

        if errors:
            logger.warning(
                "Roster import for company %s finished with %d invalid row(s) out of %d; "
                "roster left unchanged",
                company_id, len(errors), len(sheet),
            )
            report = await asyncio.to_thread(
                render_roster, [r.values for r in sheet], annotations
            )
            return ImportOutcome(had_errors=True, report=report, errors=errors)

        try:
            removed = await self._persons.replace_roster(company_id, valid)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            logger.exception(
                "Roster replace failed for company %s; transaction rolled back", company_id
            )
            raise

        logger.info(
            "Roster for company %s replaced: %d removed, %d imported",
            company_id, removed, len(valid),
        )
        report = await asyncio.to_thread(render_roster, valid)
        return ImportOutcome(had_errors=False, report=report, imported=len(valid))
