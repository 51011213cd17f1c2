"""Pagination helpers for list endpoints.

Page metadata travels in ``X-Pagination-*`` response headers so that the body
is ``{"data": [...]}`` whether or not the caller asked for paging.
"""

import asyncio
import math
from collections.abc import Callable
from typing import Any

from fastapi import Query, Response
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from directory_api.core.config import settings


class PaginationParams:
    """FastAPI dependency for `?paging=true&page=1&limit=10`."""

    def __init__(
        self,
        paging: bool = Query(default=False, description="Return one page instead of the full list"),
        page: int = Query(default=1, description="Page number (1-based; values below 1 mean 1)"),
        limit: int | None = Query(default=None, ge=1, le=200, description="Items per page"),
    ):
        self.paging = paging
        self.page = max(page, 1)
        self.limit = limit or settings.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel):
    """One page of results plus the counters that go into the response headers."""

    items: list[Any]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.limit))

    def headers(self) -> dict[str, str]:
        return {
            "X-Pagination-Count": str(self.total),
            "X-Pagination-Limit": str(self.limit),
            "X-Pagination-Pages": str(self.pages),
            "X-Pagination-Page": str(self.page),
        }

    def apply_to(self, response: Response) -> None:
        response.headers.update(self.headers())


async def paginate(
    session_factory: async_sessionmaker[AsyncSession],
    statement_factory: Callable[[], Select],
    page: int,
    page_size: int | None = None,
) -> Page:
    """Run the count and the bounded fetch for one page concurrently.

    *statement_factory* must return an equivalent, independent statement on
    every call; each half runs in its own session.
    """
    page = max(page, 1)
    limit = page_size or settings.page_size

    async def _count() -> int:
        stmt = select(func.count()).select_from(statement_factory().order_by(None).subquery())
        async with session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    async def _fetch() -> list[Any]:
        stmt = statement_factory().offset((page - 1) * limit).limit(limit)
        async with session_factory() as session:
            return list((await session.execute(stmt)).scalars().all())

    total, items = await asyncio.gather(_count(), _fetch())
    return Page(items=items, total=total, page=page, limit=limit)
