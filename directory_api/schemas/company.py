"""Company Pydantic schemas (request DTOs and response models).

The logo blob is never part of a response model.
"""


from datetime import datetime

from pydantic import Field

from directory_api.schemas.common import CamelModel

class CompanyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)

class CompanyUpdate(CamelModel):
    """Full replacement document (PUT) and the shape JSON patches must keep."""

    name: str = Field(min_length=1, max_length=255)

class CompanyBrief(CamelModel):
    id: str
    name: str

class CompanyOut(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
