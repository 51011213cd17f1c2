"""Register listings for sectors and companies.

Registers come back with their person, sector and paired register loaded,
newest id first.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError
from directory_api.core.filters import QueryFilters, register_statement
from directory_api.domain.register import Register
from directory_api.repositories.company import CompanyRepository
from directory_api.repositories.register import RegisterRepository
from directory_api.repositories.sector import SectorRepository


class RegisterService:
    def __init__(self, session: AsyncSession):
        self._registers = RegisterRepository(session)
        self._sectors = SectorRepository(session)
        self._companies = CompanyRepository(session)

    async def sector_registers(self, sector_id: str, filters: QueryFilters) -> list[Register]:
        if not await self._sectors.exists(sector_id):
            raise NotFoundError("Sector", sector_id)
        return await self._registers.list(register_statement(filters, sector_id=sector_id))

    async def company_registers(self, company_id: str, filters: QueryFilters) -> list[Register]:
        if not await self._companies.exists(company_id):
            raise NotFoundError("Company", company_id)
        return await self._registers.list(register_statement(filters, company_id=company_id))
