"""Person repository: roster-scoped reads, bulk replace and counters."""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, delete, func, select

from directory_api.domain.person import Person
from directory_api.domain.register import Register
from directory_api.repositories.base import BaseRepository


class PersonRepository(BaseRepository[Person]):
    model = Person

    async def list_for_company(self, company_id: str) -> list[Person]:
        return await self.list(
            self._base_query()
            .where(Person.company_id == company_id)
            .order_by(Person.id.asc())
        )

    async def replace_roster(self, company_id: str, rows: list[dict[str, Any]]) -> int:
        """Delete every person of *company_id* and insert *rows* in their place.

        Runs inside the caller's transaction; nothing is committed here.
        Returns the number of persons removed.
        """
        result = await self._session.execute(
            delete(Person).where(Person.company_id == company_id)
        )
        self._session.add_all(Person(company_id=company_id, **row) for row in rows)
        await self._session.flush()
        return result.rowcount

    async def delete_for_company(self, company_id: str) -> int:
        result = await self._session.execute(
            delete(Person).where(Person.company_id == company_id)
        )
        await self._session.flush()
        return result.rowcount

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def activity_counts(self, company_id: str) -> tuple[int, int]:
        """``(total, active)`` for the company's roster."""
        row = (
            await self._session.execute(
                select(
                    func.count(Person.id),
                    func.coalesce(func.sum(case((Person.active.is_(True), 1), else_=0)), 0),
                ).where(Person.company_id == company_id)
            )
        ).one()
        return int(row[0]), int(row[1])

    async def counts_by_type(self, company_id: str) -> dict[str | None, int]:
        rows = await self._session.execute(
            select(Person.type, func.count(Person.id))
            .where(Person.company_id == company_id)
            .group_by(Person.type)
        )
        return {person_type: count for person_type, count in rows.all()}

    async def register_count(self, company_id: str) -> int:
        """Registers produced by the company's persons."""
        result = await self._session.execute(
            select(func.count(Register.id))
            .join(Person, Register.person_id == Person.id)
            .where(Person.company_id == company_id)
        )
        return result.scalar_one()
