"""Standardized JSON response envelope helpers."""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ROSTER_FILENAME = "persons-export.xlsx"


class DataResponse(BaseModel, Generic[T]):
    """Response envelope: `{ data: ... }` for single items and lists alike.

    Paginated listings carry their page metadata in headers, so the body has
    the same shape with or without paging.
    """

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def spreadsheet_headers(filename: str = ROSTER_FILENAME) -> dict[str, str]:
    """Headers for an xlsx attachment download."""
    return {"Content-Disposition": f"attachment; filename={filename}"}
