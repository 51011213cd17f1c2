from __future__ import annotations

import os
from collections.abc import AsyncGenerator

os.environ.setdefault("APP_ENV", "test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import directory_api.domain  # noqa: F401
from directory_api.db.base import Base, get_db, get_session_factory
from directory_api.domain.company import Company
from directory_api.domain.person import Person
from directory_api.domain.sector import Sector
from directory_api.main import app

# ---------------------------------------------------------------------------
# Database / app fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    yield factory
    await engine.dispose()


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _get_db():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """Persist ORM objects and return them (ids populated)."""

    async def _seed(*objects):
        async with session_factory() as s:
            s.add_all(objects)
            await s.commit()
        return objects if len(objects) > 1 else objects[0]

    return _seed


@pytest.fixture
def roster(session_factory):
    """Current roster of a company as comparable tuples (ids ignored)."""

    async def _roster(company_id: str) -> set[tuple]:
        async with session_factory() as s:
            persons = (
                await s.execute(select(Person).where(Person.company_id == company_id))
            ).scalars().all()
        return {(p.rut, p.name, p.card, p.active, p.type) for p in persons}

    return _roster


@pytest.fixture
async def company(seed) -> Company:
    return await seed(Company(id="acme", name="Acme", logo=b"\x89PNG"))


@pytest.fixture
async def sector(seed) -> Sector:
    return await seed(Sector(id="gate-a", name="Gate A"))
