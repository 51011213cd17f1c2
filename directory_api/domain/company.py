"""SQLAlchemy ORM model for Companies.

A company owns its roster: every Person row points back to exactly one
company through ``company_id``. The logo is deferred so that listings and
person joins never pull the blob.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.db.base import Base
from directory_api.domain.mixins import TimestampMixin


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    logo: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True, deferred=True)

    persons: Mapped[List["Person"]] = relationship(
        back_populates="company", lazy="noload", passive_deletes=True
    )
