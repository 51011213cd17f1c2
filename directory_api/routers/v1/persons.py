"""Person router — single-record show / destroy."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.response import DataResponse
from directory_api.db.base import get_db
from directory_api.schemas.person import PersonBrief
from directory_api.services.person import PersonService

router = APIRouter(prefix="/persons", tags=["Persons"])


@router.get("/{person_id}", response_model=DataResponse[PersonBrief])
async def get_person(person_id: int, session: AsyncSession = Depends(get_db)):
    person = await PersonService(session).get_person(person_id)
    return {"data": PersonBrief.model_validate(person)}


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: int, session: AsyncSession = Depends(get_db)):
    await PersonService(session).delete_person(person_id)
