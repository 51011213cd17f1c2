from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from io import BytesIO
from typing import Any

from openpyxl import Workbook, load_workbook

from directory_api.services.roster_export import ROSTER_COLUMNS

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ADMIN = {"X-User-Role": "admin"}


def owner_of(*company_ids: str) -> dict[str, str]:
    return {"X-User-Role": "manager", "X-User-Companies": ",".join(company_ids)}


def at(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def make_sheet(rows: Iterable[Sequence[Any]], headers: Sequence[str] = ROSTER_COLUMNS) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(list(headers))
    for row in rows:
        ws.append(list(row))
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def read_sheet(content: bytes) -> list[tuple]:
    wb = load_workbook(BytesIO(content))
    return [tuple(r) for r in wb.active.iter_rows(values_only=True)]


def upload(content: bytes, filename: str = "persons.xlsx", content_type: str = XLSX) -> dict:
    return {"file": (filename, content, content_type)}
