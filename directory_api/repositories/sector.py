"""Sector repository."""


from sqlalchemy import Select

from directory_api.core.filters import prefix_match
from directory_api.domain.sector import Sector
from directory_api.repositories.base import BaseRepository


class SectorRepository(BaseRepository[Sector]):
    model = Sector

    def name_query(self, name: str | None) -> Select:
        stmt = self._base_query().order_by(Sector.id.asc())
        if name:
            stmt = stmt.where(prefix_match(Sector.name, name))
        return stmt

    async def upsert(self, sector_id: str, **kwargs) -> Sector:
        if await self.exists(sector_id):
            return await self.update(sector_id, **kwargs)  # type: ignore[return-value]
        return await self.create(id=sector_id, **kwargs)
