"""Register repository: read-only listings and per-sector counters."""

from __future__ import annotations

from sqlalchemy import case, distinct, func, select

from directory_api.domain.register import Register
from directory_api.repositories.base import BaseRepository


class RegisterRepository(BaseRepository[Register]):
    model = Register

    async def sector_totals(self, sector_id: str) -> tuple[int, int, int]:
        """``(total, incomplete, distinct persons)`` for registers in *sector_id*."""
        row = (
            await self._session.execute(
                select(
                    func.count(Register.id),
                    func.coalesce(
                        func.sum(case((Register.is_resolved.is_(False), 1), else_=0)), 0
                    ),
                    func.count(distinct(Register.person_id)),
                ).where(Register.sector_id == sector_id)
            )
        ).one()
        return int(row[0]), int(row[1]), int(row[2])

    async def sector_counts_by(self, sector_id: str, column) -> dict[str | None, int]:
        """Register count per distinct value of *column* within *sector_id*."""
        rows = await self._session.execute(
            select(column, func.count(Register.id))
            .where(Register.sector_id == sector_id)
            .group_by(column)
        )
        return {value: count for value, count in rows.all()}
