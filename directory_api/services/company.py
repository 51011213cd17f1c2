"""Company service: plain CRUD plus the roster listing and person creation."""


from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from directory_api.core.exceptions import NotFoundError
from directory_api.core.filters import QueryFilters, person_statement
from directory_api.core.pagination import Page, PaginationParams, paginate
from directory_api.core.patch import apply_patch
from directory_api.domain.company import Company
from directory_api.domain.person import Person
from directory_api.repositories.company import CompanyRepository
from directory_api.repositories.person import PersonRepository
from directory_api.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from directory_api.schemas.patch import PatchDocument
from directory_api.schemas.person import PersonCreate

class CompanyService:
    def __init__(self, session: AsyncSession):
        self._repo = CompanyRepository(session)
        self._persons = PersonRepository(session)

    async def list_companies(self) -> list[Company]:
        return await self._repo.list()

    async def get_company(self, company_id: str) -> Company:
        company = await self._repo.get_by_id(company_id)
        if not company:
            raise NotFoundError("Company", company_id)
        return company

    async def create_company(self, data: CompanyCreate) -> Company:
        return await self._repo.create(**data.model_dump(exclude_none=True))

    async def upsert_company(self, company_id: str, data: CompanyUpdate) -> Company:
        return await self._repo.upsert(company_id, **data.model_dump())

    async def patch_company(self, company_id: str, patch: PatchDocument) -> Company:
        company = await self.get_company(company_id)
        current = CompanyOut.model_validate(company).model_dump(by_alias=True)
        changes = apply_patch(current, patch, CompanyUpdate)
        return await self._repo.update(company_id, **changes)  # type: ignore[return-value]

    async def delete_company(self, company_id: str) -> None:
        _ = await self.get_company(company_id)  # raises 404 if missing
        await self._persons.delete_for_company(company_id)
        await self._repo.delete(company_id)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    async def list_persons(
        self,
        company_id: str,
        filters: QueryFilters,
        pagination: PaginationParams,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> tuple[list[Person], Page | None]:
        """Persons of the company matching *filters*.

        Without ``paging`` the full filtered roster is returned and the page is
        ``None``. With it, the requested page is returned; ``top`` then caps
        the items of that page and does not change the page counters.
        """
        if not await self._repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        if not pagination.paging:
            stmt = person_statement(company_id, filters)
            if filters.top:
                stmt = stmt.limit(filters.top)
            return await self._persons.list(stmt), None

        page = await paginate(
            session_factory,
            lambda: person_statement(company_id, filters),
            pagination.page,
            pagination.limit,
        )
        items = page.items[: filters.top] if filters.top else page.items
        return items, page

    async def create_person(self, company_id: str, data: PersonCreate) -> Person:
        if not await self._repo.exists(company_id):
            raise NotFoundError("Company", company_id)
        return await self._persons.create(company_id=company_id, **data.model_dump())
