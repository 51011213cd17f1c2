"""Company router: CRUD, roster listing, analytics and spreadsheet import/export.

Pattern:
  1. Inject DB session (+ principal where the roster is touched) via Depends
  2. Gate roster-changing paths with require_company_access before any work
  3. Call the service and wrap the result in the response envelope
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.datastructures import UploadFile

from directory_api.core.config import settings
from directory_api.core.exceptions import AppException
from directory_api.core.filters import QueryFilters, query_filters
from directory_api.core.pagination import PaginationParams
from directory_api.core.response import DataResponse, XLSX_MEDIA_TYPE, spreadsheet_headers
from directory_api.core.security import Principal, get_current_principal, require_company_access
from directory_api.db.base import get_db, get_session_factory
from directory_api.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from directory_api.schemas.patch import PatchDocument
from directory_api.schemas.person import PersonCreate, PersonOut
from directory_api.schemas.register import RegisterOut
from directory_api.schemas.statistics import CompanyStatistics
from directory_api.services.company import CompanyService
from directory_api.services.registers import RegisterService
from directory_api.services.roster_export import RosterExportService
from directory_api.services.roster_import import RosterImportService
from directory_api.services.statistics import StatisticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])

_ALLOWED_CONTENT_TYPES = {XLSX_MEDIA_TYPE, "application/octet-stream"}
_ALLOWED_EXTENSIONS = (".xlsx",)


# ---------------------------------------------------------------------------
# Upload validation (HTTP concern — stays in the router)
# ---------------------------------------------------------------------------

async def _read_upload(request: Request, field: str = "file") -> bytes:
    """Parse the multipart body and return the spreadsheet bytes.

    Raises AppException on invalid input.
    """
    async with request.form() as form:
        upload = form.get(field)
        if not isinstance(upload, UploadFile):
            raise AppException(f"Missing '{field}' upload.", status_code=400, code="BAD_REQUEST")

        filename = (upload.filename or "").lower()
        if (
            not filename.endswith(_ALLOWED_EXTENSIONS)
            and upload.content_type not in _ALLOWED_CONTENT_TYPES
        ):
            raise AppException(
                f"Unsupported file type '{upload.content_type}'. Accepted formats: .xlsx",
                status_code=415,
                code="UNSUPPORTED_MEDIA_TYPE",
            )

        contents = await upload.read()

    if len(contents) == 0:
        raise AppException("Uploaded file is empty.", status_code=400, code="BAD_REQUEST")

    if len(contents) > settings.max_upload_size_bytes:
        raise AppException(
            f"File size exceeds the {settings.max_upload_size_mb}MB limit.",
            status_code=413,
            code="PAYLOAD_TOO_LARGE",
        )

    return contents


# ------------------------------------------------------------------
# CRUD
# ------------------------------------------------------------------

@router.get("", response_model=DataResponse[list[CompanyOut]])
async def list_companies(session: AsyncSession = Depends(get_db)):
    companies = await CompanyService(session).list_companies()
    return {"data": [CompanyOut.model_validate(c) for c in companies]}


@router.post("", response_model=DataResponse[CompanyOut], status_code=status.HTTP_201_CREATED)
async def create_company(body: CompanyCreate, session: AsyncSession = Depends(get_db)):
    company = await CompanyService(session).create_company(body)
    return {"data": CompanyOut.model_validate(company)}


@router.get("/{company_id}", response_model=DataResponse[CompanyOut])
async def get_company(company_id: str, session: AsyncSession = Depends(get_db)):
    company = await CompanyService(session).get_company(company_id)
    return {"data": CompanyOut.model_validate(company)}


@router.put("/{company_id}", response_model=DataResponse[CompanyOut])
async def upsert_company(
    company_id: str,
    body: CompanyUpdate,
    session: AsyncSession = Depends(get_db),
):
    company = await CompanyService(session).upsert_company(company_id, body)
    return {"data": CompanyOut.model_validate(company)}


@router.patch("/{company_id}", response_model=DataResponse[CompanyOut])
async def patch_company(
    company_id: str,
    body: PatchDocument,
    session: AsyncSession = Depends(get_db),
):
    company = await CompanyService(session).patch_company(company_id, body)
    return {"data": CompanyOut.model_validate(company)}


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(company_id: str, session: AsyncSession = Depends(get_db)):
    await CompanyService(session).delete_company(company_id)


# ------------------------------------------------------------------
# Roster
# ------------------------------------------------------------------

@router.get("/{company_id}/persons", response_model=DataResponse[list[PersonOut]])
async def list_company_persons(
    company_id: str,
    response: Response,
    filters: QueryFilters = Depends(query_filters),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Persons of the company. Filter by ?rut=&name=&personType=&status=.

    With ?paging=true the page metadata is returned in X-Pagination-* headers.
    """
    persons, page = await CompanyService(session).list_persons(
        company_id, filters, pagination, session_factory
    )
    if page is not None:
        page.apply_to(response)
    return {"data": [PersonOut.model_validate(p) for p in persons]}


@router.post(
    "/{company_id}/persons",
    response_model=DataResponse[PersonOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_company_person(
    company_id: str,
    body: PersonCreate,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    require_company_access(principal, company_id, "create a new person")
    person = await CompanyService(session).create_person(company_id, body)
    return {"data": PersonOut.model_validate(person)}


@router.get("/{company_id}/export")
async def export_company_roster(
    company_id: str,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Download the company's roster as an xlsx file."""
    require_company_access(principal, company_id, "export")
    content = await RosterExportService(session).export_roster(company_id)
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=spreadsheet_headers())


@router.post("/{company_id}/import", status_code=status.HTTP_201_CREATED)
async def import_company_roster(
    company_id: str,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Replace the company's roster with the uploaded xlsx (multipart field ``file``).

    Responds 201 with the imported roster when every row is valid, or 422
    with the same file annotated with an error column otherwise.
    """
    require_company_access(principal, company_id, "import")
    contents = await _read_upload(request)

    outcome = await RosterImportService(session).import_roster(company_id, contents)

    status_code = status.HTTP_201_CREATED
    if outcome.had_errors:
        logger.info("Import finished with %d error(s)", len(outcome.errors))
        status_code = 422
    return Response(
        content=outcome.report,
        status_code=status_code,
        media_type=XLSX_MEDIA_TYPE,
        headers=spreadsheet_headers(),
    )


# ------------------------------------------------------------------
# Analytics
# ------------------------------------------------------------------

@router.get("/{company_id}/statistics", response_model=DataResponse[CompanyStatistics])
async def company_statistics(company_id: str, session: AsyncSession = Depends(get_db)):
    stats = await StatisticsService(session).company_statistics(company_id)
    return {"data": stats}


@router.get("/{company_id}/registers", response_model=DataResponse[list[RegisterOut]])
async def company_registers(
    company_id: str,
    filters: QueryFilters = Depends(query_filters),
    session: AsyncSession = Depends(get_db),
):
    """Registers of the company's persons, newest first. Same filters as sector registers."""
    registers = await RegisterService(session).company_registers(company_id, filters)
    return {"data": [RegisterOut.model_validate(r) for r in registers]}
