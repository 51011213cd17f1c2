"""Person Pydantic schemas."""


from pydantic import Field

from directory_api.schemas.common import CamelModel
from directory_api.schemas.company import CompanyBrief

class PersonCreate(CamelModel):
    rut: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)
    card: int | None = None
    active: bool = True
    type: str | None = Field(default=None, max_length=50)

class PersonBrief(CamelModel):
    id: int
    rut: str
    name: str
    company_id: str
    card: int | None = None
    active: bool
    type: str | None = None

class PersonOut(PersonBrief):
    # Populated on roster listings; the logo is never loaded.
    company: CompanyBrief | None = None
