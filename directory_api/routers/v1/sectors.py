"""Sector router: CRUD, register listing and statistics."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.filters import QueryFilters, query_filters
from directory_api.core.response import DataResponse
from directory_api.db.base import get_db
from directory_api.schemas.patch import PatchDocument
from directory_api.schemas.register import RegisterOut
from directory_api.schemas.sector import SectorCreate, SectorOut, SectorUpdate
from directory_api.schemas.statistics import SectorStatistics
from directory_api.services.registers import RegisterService
from directory_api.services.sector import SectorService
from directory_api.services.statistics import StatisticsService

router = APIRouter(prefix="/sectors", tags=["Sectors"])


@router.get("", response_model=DataResponse[list[SectorOut]])
async def list_sectors(
    name: Optional[str] = Query(default=None, description="Case-insensitive name prefix"),
    session: AsyncSession = Depends(get_db),
):
    sectors = await SectorService(session).list_sectors(name)
    return {"data": [SectorOut.model_validate(s) for s in sectors]}


@router.post("", response_model=DataResponse[SectorOut], status_code=status.HTTP_201_CREATED)
async def create_sector(body: SectorCreate, session: AsyncSession = Depends(get_db)):
    sector = await SectorService(session).create_sector(body)
    return {"data": SectorOut.model_validate(sector)}


@router.get("/{sector_id}", response_model=DataResponse[SectorOut])
async def get_sector(sector_id: str, session: AsyncSession = Depends(get_db)):
    sector = await SectorService(session).get_sector(sector_id)
    return {"data": SectorOut.model_validate(sector)}


@router.put("/{sector_id}", response_model=DataResponse[SectorOut])
async def upsert_sector(
    sector_id: str,
    body: SectorUpdate,
    session: AsyncSession = Depends(get_db),
):
    sector = await SectorService(session).upsert_sector(sector_id, body)
    return {"data": SectorOut.model_validate(sector)}


@router.patch("/{sector_id}", response_model=DataResponse[SectorOut])
async def patch_sector(
    sector_id: str,
    body: PatchDocument,
    session: AsyncSession = Depends(get_db),
):
    sector = await SectorService(session).patch_sector(sector_id, body)
    return {"data": SectorOut.model_validate(sector)}


@router.delete("/{sector_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sector(sector_id: str, session: AsyncSession = Depends(get_db)):
    await SectorService(session).delete_sector(sector_id)


@router.get("/{sector_id}/registers", response_model=DataResponse[list[RegisterOut]])
async def sector_registers(
    sector_id: str,
    filters: QueryFilters = Depends(query_filters),
    session: AsyncSession = Depends(get_db),
):
    """Registers of the sector, newest first.

    Filters: ?type=&personType=&from=&to= (epoch ms)&top=&incomplete=true
    """
    registers = await RegisterService(session).sector_registers(sector_id, filters)
    return {"data": [RegisterOut.model_validate(r) for r in registers]}


@router.get("/{sector_id}/statistics", response_model=DataResponse[SectorStatistics])
async def sector_statistics(sector_id: str, session: AsyncSession = Depends(get_db)):
    stats = await StatisticsService(session).sector_statistics(sector_id)
    return {"data": stats}
