"""v1 router package — all /api/v1/* endpoints live here.

Files:
  companies.py  — Company CRUD, roster listing/creation, import/export, analytics
  sectors.py    — Sector CRUD, register listing, statistics
  persons.py    — Single person show / destroy

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to directory_api/services/.
"""
