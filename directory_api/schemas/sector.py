"""Sector Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from directory_api.schemas.common import CamelModel

class SectorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)

class SectorUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=255)

class SectorBrief(CamelModel):
    id: str
    name: str

class SectorOut(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
