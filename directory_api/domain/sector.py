"""SQLAlchemy ORM model for Sectors."""

from __future__ import annotations

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.db.base import Base
from directory_api.domain.mixins import TimestampMixin


class Sector(Base, TimestampMixin):
    __tablename__ = "sectors"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
