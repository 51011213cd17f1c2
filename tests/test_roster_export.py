from __future__ import annotations

import pytest

from directory_api.domain.company import Company
from directory_api.domain.person import Person
from tests.helpers import ADMIN, XLSX, owner_of, read_sheet, upload

URL = "/api/v1/companies/acme/export"


@pytest.fixture
async def persons(seed, company):
    return await seed(
        Person(rut="A1", name="X", company_id="acme"),
        Person(rut="B2", name="Y", company_id="acme", card=77, active=False, type="contractor"),
    )


async def test_export_renders_fixed_columns(client, persons):
    resp = await client.get(URL, headers=owner_of("acme"))

    assert resp.status_code == 200
    assert resp.headers["content-type"] == XLSX
    assert resp.headers["content-disposition"] == "attachment; filename=persons-export.xlsx"
    assert read_sheet(resp.content) == [
        ("rut", "name", "card", "active", "type"),
        ("A1", "X", None, True, None),
        ("B2", "Y", 77, False, "contractor"),
    ]


async def test_export_only_includes_the_company_roster(client, persons, seed):
    await seed(Company(id="globex", name="Globex"))
    await seed(Person(rut="Z9", name="Elsewhere", company_id="globex"))

    resp = await client.get(URL, headers=ADMIN)

    assert [row[0] for row in read_sheet(resp.content)[1:]] == ["A1", "B2"]


async def test_export_then_import_keeps_the_roster(client, persons, roster):
    before = await roster("acme")
    exported = (await client.get(URL, headers=ADMIN)).content

    resp = await client.post(
        "/api/v1/companies/acme/import", files=upload(exported), headers=ADMIN
    )

    assert resp.status_code == 201
    assert await roster("acme") == before


async def test_export_of_empty_roster_is_header_only(client, company):
    resp = await client.get(URL, headers=ADMIN)

    assert read_sheet(resp.content) == [("rut", "name", "card", "active", "type")]


async def test_export_requires_ownership(client, persons):
    resp = await client.get(URL, headers=owner_of("globex"))

    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "not enough permission to export in company acme"


async def test_export_unknown_company_is_404(client):
    resp = await client.get("/api/v1/companies/nope/export", headers=ADMIN)

    assert resp.status_code == 404
