"""SQLAlchemy ORM model for Registers (access / attendance events).

Registers are append-only. A register is resolved when its pairing event
(e.g. the check-out for a check-in) arrives; ``resolved_register_id`` then
points at that event.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.db.base import Base
from directory_api.domain.mixins import TimestampMixin


class Register(Base, TimestampMixin):
    __tablename__ = "registers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    person_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    is_resolved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # History outlives roster replaces and sector removal.
    person_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("persons.id", ondelete="SET NULL"), nullable=True, index=True
    )
    sector_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("sectors.id", ondelete="SET NULL"), nullable=True, index=True
    )
    resolved_register_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("registers.id", ondelete="SET NULL"), nullable=True
    )

    person: Mapped[Optional["Person"]] = relationship(lazy="noload")
    sector: Mapped[Optional["Sector"]] = relationship(lazy="noload")
    resolved_register: Mapped[Optional["Register"]] = relationship(
        remote_side=[id], lazy="noload"
    )
