"""Domain package — all ORM models are imported here so ``init_models`` sees them.

Folder intent:
  company.py   — Companies (tenant; own a roster of persons)
  person.py    — Roster entries, scoped to one company
  sector.py    — Organizational sectors registers are tagged with
  register.py  — Append-only access / attendance events
  mixins.py    — Shared TimestampMixin
"""

from directory_api.domain.company import Company
from directory_api.domain.person import Person
from directory_api.domain.register import Register
from directory_api.domain.sector import Sector

__all__ = [
    "Company",
    "Person",
    "Register",
    "Sector",
]
