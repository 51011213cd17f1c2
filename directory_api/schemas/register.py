"""Register Pydantic schemas (denormalized read models)."""


from datetime import datetime

from directory_api.schemas.common import CamelModel
from directory_api.schemas.person import PersonBrief
from directory_api.schemas.sector import SectorBrief

class PairedRegisterOut(CamelModel):
    """The register that resolved another one, with its own sector inline."""

    id: int
    time: datetime
    type: str
    person_type: str | None = None
    is_resolved: bool
    person_id: int | None = None
    sector: SectorBrief | None = None

class RegisterOut(CamelModel):
    id: int
    time: datetime
    type: str
    person_type: str | None = None
    is_resolved: bool
    person: PersonBrief | None = None
    sector: SectorBrief | None = None
    resolved_register: PairedRegisterOut | None = None
