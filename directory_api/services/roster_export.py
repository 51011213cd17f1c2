"""Roster spreadsheet rendering and export.

The column set below is the roster file format: the exporter writes it and
the importer reads it, so an exported file is always a valid import.
"""


import asyncio
from collections.abc import Mapping, Sequence
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError
from directory_api.domain.person import Person
from directory_api.repositories.company import CompanyRepository
from directory_api.repositories.person import PersonRepository

ROSTER_COLUMNS: tuple[str, ...] = ("rut", "name", "card", "active", "type")
ERROR_COLUMN = "error"
SHEET_TITLE = "persons"


def person_row(person: Person) -> dict[str, Any]:
    return {
        "rut": person.rut,
        "name": person.name,
        "card": person.card,
        "active": person.active,
        "type": person.type,
    }


def render_roster(
    rows: Sequence[Mapping[str, Any]],
    errors: Sequence[str | None] | None = None,
) -> bytes:
    """Render *rows* as an xlsx workbook.

    When *errors* is given (one entry per row) an extra error column is
    appended and filled for the rows that failed.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    headers = list(ROSTER_COLUMNS)
    if errors is not None:
        headers.append(ERROR_COLUMN)
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for idx, row in enumerate(rows):
        values = [row.get(col) for col in ROSTER_COLUMNS]
        if errors is not None:
            values.append(errors[idx])
        ws.append(values)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


class RosterExportService:
    def __init__(self, session: AsyncSession):
        self._companies = CompanyRepository(session)
        self._persons = PersonRepository(session)

    async def export_roster(self, company_id: str) -> bytes:
        if not await self._companies.exists(company_id):
            raise NotFoundError("Company", company_id)
        persons = await self._persons.list_for_company(company_id)
        rows = [person_row(p) for p in persons]
        return await asyncio.to_thread(render_roster, rows)
