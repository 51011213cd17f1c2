"""Person service — single-record reads and removal."""


from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.exceptions import NotFoundError
from directory_api.domain.person import Person
from directory_api.repositories.person import PersonRepository

class PersonService:
    def __init__(self, session: AsyncSession):
        self._repo = PersonRepository(session)

    async def get_person(self, person_id: int) -> Person:
        person = await self._repo.get_by_id(person_id)
        if not person:
            raise NotFoundError("Person", person_id)
        return person

    async def delete_person(self, person_id: int) -> None:
        deleted = await self._repo.delete(person_id)
        if not deleted:
            raise NotFoundError("Person", person_id)
