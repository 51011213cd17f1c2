"""Sector service — plain CRUD."""


from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError
from directory_api.core.patch import apply_patch
from directory_api.domain.sector import Sector
from directory_api.repositories.sector import SectorRepository
from directory_api.schemas.patch import PatchDocument
from directory_api.schemas.sector import SectorCreate, SectorOut, SectorUpdate

class SectorService:
    def __init__(self, session: AsyncSession):
        self._repo = SectorRepository(session)

    async def list_sectors(self, name: str | None = None) -> list[Sector]:
        return await self._repo.list(self._repo.name_query(name))

    async def get_sector(self, sector_id: str) -> Sector:
        sector = await self._repo.get_by_id(sector_id)
        if not sector:
            raise NotFoundError("Sector", sector_id)
        return sector

    async def create_sector(self, data: SectorCreate) -> Sector:
        return await self._repo.create(**data.model_dump())

    async def upsert_sector(self, sector_id: str, data: SectorUpdate) -> Sector:
        return await self._repo.upsert(sector_id, **data.model_dump())

    async def patch_sector(self, sector_id: str, patch: PatchDocument) -> Sector:
        sector = await self.get_sector(sector_id)
        current = SectorOut.model_validate(sector).model_dump(by_alias=True)
        changes = apply_patch(current, patch, SectorUpdate)
        return await self._repo.update(sector_id, **changes)  # type: ignore[return-value]

    async def delete_sector(self, sector_id: str) -> None:
        deleted = await self._repo.delete(sector_id)
        if not deleted:
            raise NotFoundError("Sector", sector_id)
