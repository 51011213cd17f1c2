"""Services package — all business logic lives here, never in routers.

Files:
  company.py        — Company CRUD, roster listing (filters + paging), person creation
  sector.py         — Sector CRUD
  person.py         — Single person reads / removal
  roster_import.py  — Spreadsheet roster replace with per-row validation report
  roster_export.py  — Roster spreadsheet rendering (shared file format)
  statistics.py     — Company / sector counters
  registers.py      — Denormalized register listings

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
