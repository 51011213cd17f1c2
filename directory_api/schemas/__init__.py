"""Pydantic schemas package.

Folder intent:
  common.py      — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  company.py     — Company DTOs (logo never exposed)
  person.py      — Person DTOs, roster listing rows
  sector.py      — Sector DTOs
  register.py    — Denormalized register read models
  statistics.py  — Company / sector counters
  patch.py       — Closed set of JSON-patch operations
"""
