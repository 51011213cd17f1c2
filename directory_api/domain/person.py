"""SQLAlchemy ORM model for Persons (roster entries)."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.db.base import Base
from directory_api.domain.mixins import TimestampMixin


class Person(Base, TimestampMixin):
    __tablename__ = "persons"
    # Ids are never reused, so id order is creation order.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rut: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    card: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Categorical, e.g. "staff" | "contractor" | "visitor"
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)

    company: Mapped["Company"] = relationship(back_populates="persons", lazy="noload")
