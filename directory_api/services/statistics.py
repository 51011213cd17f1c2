"""Read-only counters for companies and sectors."""


from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError
from directory_api.domain.register import Register
from directory_api.repositories.company import CompanyRepository
from directory_api.repositories.person import PersonRepository
from directory_api.repositories.register import RegisterRepository
from directory_api.repositories.sector import SectorRepository
from directory_api.schemas.statistics import CompanyStatistics, SectorStatistics

UNKNOWN_BUCKET = "unknown"


def _bucketed(counts: dict[str | None, int]) -> dict[str, int]:
    """Fold the NULL group into the ``unknown`` bucket."""
    out: dict[str, int] = {}
    for key, count in counts.items():
        bucket = key or UNKNOWN_BUCKET
        out[bucket] = out.get(bucket, 0) + count
    return out


class StatisticsService:
    def __init__(self, session: AsyncSession):
        self._companies = CompanyRepository(session)
        self._sectors = SectorRepository(session)
        self._persons = PersonRepository(session)
        self._registers = RegisterRepository(session)

    async def company_statistics(self, company_id: str) -> CompanyStatistics:
        if not await self._companies.exists(company_id):
            raise NotFoundError("Company", company_id)
        total, active = await self._persons.activity_counts(company_id)
        return CompanyStatistics(
            total=total,
            active=active,
            inactive=total - active,
            registers=await self._persons.register_count(company_id),
            by_type=_bucketed(await self._persons.counts_by_type(company_id)),
        )

    async def sector_statistics(self, sector_id: str) -> SectorStatistics:
        if not await self._sectors.exists(sector_id):
            raise NotFoundError("Sector", sector_id)
        total, incomplete, persons = await self._registers.sector_totals(sector_id)
        by_type = await self._registers.sector_counts_by(sector_id, Register.type)
        by_person_type = await self._registers.sector_counts_by(sector_id, Register.person_type)
        return SectorStatistics(
            total=total,
            incomplete=incomplete,
            persons=persons,
            by_type=_bucketed(by_type),
            by_person_type=_bucketed(by_person_type),
        )
