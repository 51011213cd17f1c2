"""Query filters for person and register listings.

``QueryFilters`` is the closed set of query keys the listing endpoints
understand. Each key's effect on a given target is declared in the
``_PERSON_EFFECTS`` / ``_REGISTER_EFFECTS`` tables below; a key missing from a
table has no effect on that target, and keys outside the model are dropped
at validation time.

Statement builders return a fresh, unexecuted ``Select`` on every call, so a
count and a fetch can be issued from the same filters without sharing a
query object.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Request
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import selectinload

from directory_api.core.exceptions import ValidationError
from directory_api.domain.person import Person
from directory_api.domain.register import Register


# Epoch-ms window a datetime can represent, one day inside its limits.
_MIN_EPOCH_MS = int((datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=1)).timestamp() * 1000)
_MAX_EPOCH_MS = int((datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=1)).timestamp() * 1000)


class QueryFilters(BaseModel):
    """Recognized listing filters. Absent keys add no constraint."""

    name: str | None = None
    rut: str | None = None
    person_type: str | None = Field(default=None, alias="personType")
    type: str | None = None
    status: bool | None = None
    active: bool | None = None
    from_: int | None = Field(
        default=None, alias="from", ge=_MIN_EPOCH_MS, le=_MAX_EPOCH_MS,
        description="Epoch milliseconds, inclusive",
    )
    to: int | None = Field(
        default=None, ge=_MIN_EPOCH_MS, le=_MAX_EPOCH_MS,
        description="Epoch milliseconds, inclusive",
    )
    top: int | None = Field(default=None, ge=1)
    incomplete: bool | None = None

    model_config = {"populate_by_name": True, "extra": "ignore", "frozen": True}

    def applied(self) -> dict[str, Any]:
        """Field name → value for every filter that was actually supplied."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def prefix_match(column, value: str) -> ColumnElement[bool]:
    """Case-insensitive match anchored at the start of *column*."""
    return func.lower(column).like(_escape_like(value.lower()) + "%", escape="\\")


def _epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


_PERSON_EFFECTS: dict[str, Callable[[Any], ColumnElement[bool]]] = {
    "name": lambda v: prefix_match(Person.name, v),
    "rut": lambda v: prefix_match(Person.rut, v),
    "person_type": lambda v: Person.type == v,
    "type": lambda v: Person.type == v,
    "status": lambda v: Person.active == v,
    "active": lambda v: Person.active == v,
}

_REGISTER_EFFECTS: dict[str, Callable[[Any], ColumnElement[bool] | None]] = {
    "type": lambda v: Register.type == v,
    "person_type": lambda v: Register.person_type == v,
    "from_": lambda v: Register.time >= _epoch_ms(v),
    "to": lambda v: Register.time <= _epoch_ms(v),
    "incomplete": lambda v: Register.is_resolved.is_(False) if v else None,
}


def _conditions(
    effects: dict[str, Callable[[Any], ColumnElement[bool] | None]],
    filters: QueryFilters,
) -> list[ColumnElement[bool]]:
    conditions = []
    for key, value in filters.applied().items():
        effect = effects.get(key)
        if effect is None:
            continue
        condition = effect(value)
        if condition is not None:
            conditions.append(condition)
    return conditions


def person_conditions(filters: QueryFilters) -> list[ColumnElement[bool]]:
    return _conditions(_PERSON_EFFECTS, filters)


def register_conditions(filters: QueryFilters) -> list[ColumnElement[bool]]:
    return _conditions(_REGISTER_EFFECTS, filters)


# ---------------------------------------------------------------------------
# Statement builders
# ---------------------------------------------------------------------------

def person_statement(company_id: str, filters: QueryFilters) -> Select:
    """Persons of *company_id* matching *filters*, ordered by id ascending.

    ``top`` is not applied here; callers decide how it combines with paging.
    """
    return (
        select(Person)
        .where(Person.company_id == company_id, *person_conditions(filters))
        .options(selectinload(Person.company))
        .order_by(Person.id.asc())
    )


def register_statement(
    filters: QueryFilters,
    *,
    sector_id: str | None = None,
    company_id: str | None = None,
) -> Select:
    """Denormalized registers matching *filters*, newest id first.

    Id-descending order stands in for chronological order and is part of the
    public contract of the register listings.
    """
    stmt = select(Register).options(
        selectinload(Register.person),
        selectinload(Register.sector),
        selectinload(Register.resolved_register).selectinload(Register.sector),
    )
    if sector_id is not None:
        stmt = stmt.where(Register.sector_id == sector_id)
    if company_id is not None:
        stmt = stmt.join(Person, Register.person_id == Person.id).where(
            Person.company_id == company_id
        )
    conditions = register_conditions(filters)
    if conditions:
        stmt = stmt.where(*conditions)
    stmt = stmt.order_by(Register.id.desc())
    if filters.top:
        stmt = stmt.limit(filters.top)
    return stmt


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def query_filters(request: Request) -> QueryFilters:
    """Build :class:`QueryFilters` from the request's query string."""
    try:
        return QueryFilters.model_validate(dict(request.query_params))
    except PydanticValidationError as exc:
        fields = ", ".join(
            str(err["loc"][0]) for err in exc.errors() if err.get("loc")
        )
        raise ValidationError(f"invalid filter value(s): {fields}") from exc
