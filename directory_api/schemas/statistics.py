"""Aggregate counter schemas for companies and sectors."""


from pydantic import Field

from directory_api.schemas.common import CamelModel

class CompanyStatistics(CamelModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    registers: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)

class SectorStatistics(CamelModel):
    total: int = 0
    incomplete: int = 0
    persons: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
    by_person_type: dict[str, int] = Field(default_factory=dict)
