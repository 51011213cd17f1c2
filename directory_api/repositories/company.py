"""Company repository."""


from directory_api.domain.company import Company
from directory_api.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    model = Company

    async def upsert(self, company_id: str, **kwargs) -> Company:
        """Update the company at *company_id*, creating it when absent."""
        if await self.exists(company_id):
            return await self.update(company_id, **kwargs)  # type: ignore[return-value]
        return await self.create(id=company_id, **kwargs)
