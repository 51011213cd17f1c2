from __future__ import annotations

import pytest

from directory_api.domain.person import Person
from tests.helpers import ADMIN, owner_of


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------

async def test_create_and_show_company(client):
    created = await client.post("/api/v1/companies", json={"name": "Initech"})

    assert created.status_code == 201
    body = created.json()["data"]
    assert body["name"] == "Initech"
    assert "logo" not in body
    assert {"createdAt", "updatedAt"} <= body.keys()

    shown = await client.get(f"/api/v1/companies/{body['id']}")
    assert shown.json()["data"]["id"] == body["id"]


async def test_list_companies_never_exposes_logo(client, company):
    resp = await client.get("/api/v1/companies")

    assert resp.status_code == 200
    [item] = resp.json()["data"]
    assert item["id"] == "acme"
    assert "logo" not in item


async def test_put_creates_then_updates(client):
    first = await client.put("/api/v1/companies/hooli", json={"name": "Hooli"})
    second = await client.put("/api/v1/companies/hooli", json={"name": "Hooli XYZ"})

    assert first.status_code == 200
    assert second.json()["data"]["id"] == "hooli"
    assert second.json()["data"]["name"] == "Hooli XYZ"
    listed = await client.get("/api/v1/companies")
    assert [c["name"] for c in listed.json()["data"]] == ["Hooli XYZ"]


async def test_create_company_requires_name(client):
    resp = await client.post("/api/v1/companies", json={})

    assert resp.status_code == 422


async def test_patch_company_replace(client, company):
    resp = await client.patch(
        "/api/v1/companies/acme",
        json=[
            {"op": "test", "path": "/name", "value": "Acme"},
            {"op": "replace", "path": "/name", "value": "Acme Corp"},
        ],
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Acme Corp"


async def test_failed_patch_test_leaves_record_untouched(client, company):
    resp = await client.patch(
        "/api/v1/companies/acme",
        json=[
            {"op": "replace", "path": "/name", "value": "Other"},
            {"op": "test", "path": "/name", "value": "Acme"},
        ],
    )

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "PATCH_TEST_FAILED"
    shown = await client.get("/api/v1/companies/acme")
    assert shown.json()["data"]["name"] == "Acme"


@pytest.mark.parametrize(
    "operations",
    [
        [{"op": "replace", "path": "/logo", "value": "x"}],
        [{"op": "remove", "path": "/name"}],
        [{"op": "replace", "path": "/name", "value": ""}],
    ],
)
async def test_invalid_patch_is_422(client, company, operations):
    resp = await client.patch("/api/v1/companies/acme", json=operations)

    assert resp.status_code == 422
    shown = await client.get("/api/v1/companies/acme")
    assert shown.json()["data"]["name"] == "Acme"


async def test_unsupported_patch_operation_is_rejected(client, company):
    resp = await client.patch(
        "/api/v1/companies/acme", json=[{"op": "move", "from": "/name", "path": "/id"}]
    )

    assert resp.status_code == 422


async def test_patch_missing_company_is_404(client):
    resp = await client.patch(
        "/api/v1/companies/nope", json=[{"op": "replace", "path": "/name", "value": "X"}]
    )

    assert resp.status_code == 404


async def test_delete_company_removes_its_roster(client, company, seed, roster):
    await seed(Person(rut="A1", name="Ana", company_id="acme"))

    resp = await client.delete("/api/v1/companies/acme")

    assert resp.status_code == 204
    assert await roster("acme") == set()
    missing = await client.get("/api/v1/companies/acme")
    assert missing.status_code == 404


async def test_delete_missing_company_is_404(client):
    resp = await client.delete("/api/v1/companies/nope")

    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Persons
# ---------------------------------------------------------------------------

async def test_owner_creates_person(client, company):
    resp = await client.post(
        "/api/v1/companies/acme/persons",
        json={"rut": "A1", "name": "Ana", "card": 7},
        headers=owner_of("acme"),
    )

    assert resp.status_code == 201
    body = resp.json()["data"]
    assert body["companyId"] == "acme"
    assert body["card"] == 7
    assert body["active"] is True


async def test_admin_creates_person_in_any_company(client, company):
    resp = await client.post(
        "/api/v1/companies/acme/persons", json={"rut": "A1", "name": "Ana"}, headers=ADMIN
    )

    assert resp.status_code == 201


async def test_non_owner_cannot_create_person(client, company, roster):
    resp = await client.post(
        "/api/v1/companies/acme/persons",
        json={"rut": "A1", "name": "Ana"},
        headers=owner_of("globex"),
    )

    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == (
        "not enough permission to create a new person in company acme"
    )
    assert await roster("acme") == set()


async def test_show_and_delete_person(client, company, seed):
    person = await seed(Person(rut="A1", name="Ana", company_id="acme", type="staff"))

    shown = await client.get(f"/api/v1/persons/{person.id}")
    deleted = await client.delete(f"/api/v1/persons/{person.id}")
    gone = await client.get(f"/api/v1/persons/{person.id}")

    assert shown.json()["data"]["rut"] == "A1"
    assert shown.json()["data"]["type"] == "staff"
    assert deleted.status_code == 204
    assert gone.status_code == 404


# ---------------------------------------------------------------------------
# Sectors
# ---------------------------------------------------------------------------

async def test_sector_crud(client):
    created = await client.post("/api/v1/sectors", json={"name": "Loading Dock"})
    sector_id = created.json()["data"]["id"]

    patched = await client.patch(
        f"/api/v1/sectors/{sector_id}",
        json=[{"op": "replace", "path": "/name", "value": "Dock 1"}],
    )
    deleted = await client.delete(f"/api/v1/sectors/{sector_id}")
    gone = await client.get(f"/api/v1/sectors/{sector_id}")

    assert created.status_code == 201
    assert patched.json()["data"]["name"] == "Dock 1"
    assert deleted.status_code == 204
    assert gone.status_code == 404


async def test_sector_name_prefix_filter(client):
    for name in ("Gate A", "gate b", "Lobby"):
        await client.post("/api/v1/sectors", json={"name": name})

    resp = await client.get("/api/v1/sectors", params={"name": "GATE"})

    assert sorted(s["name"] for s in resp.json()["data"]) == ["Gate A", "gate b"]


async def test_put_sector_with_chosen_id(client):
    resp = await client.put("/api/v1/sectors/gate-z", json={"name": "Gate Z"})

    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == "gate-z"


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_unknown_route_uses_error_envelope(client):
    resp = await client.get("/api/v1/nothing-here")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"
