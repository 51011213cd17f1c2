"""Database package — async SQLAlchemy engine, session factory, Base."""
from directory_api.db.base import (
    Base,
    async_session_factory,
    engine,
    get_db,
    get_session_factory,
    init_models,
)

__all__ = [
    "Base",
    "async_session_factory",
    "engine",
    "get_db",
    "get_session_factory",
    "init_models",
]
