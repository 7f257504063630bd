"""Organisation chart and dashboard endpoints."""

from httpx import AsyncClient


async def test_tree_lists_the_seeded_chart(client: AsyncClient, login) -> None:
    headers = await login("asistente_obras")
    response = await client.get("/api/v1/offices/tree", headers=headers)
    assert response.status_code == 200
    roots = response.json()
    assert [r["name"] for r in roots] == ["ALCALDÍA"]
    child_names = {c["name"] for c in roots[0]["children"]}
    assert "GERENCIA MUNICIPAL" in child_names
    assert "SECRETARÍA GENERAL" in child_names


async def test_only_super_admin_manages_offices(
    client: AsyncClient, login, offices: dict[str, str]
) -> None:
    payload = {
        "name": "UNIDAD DE ARCHIVO CENTRAL",
        "acronym": "UAC",
        "office_type": "UNIDAD",
        "parent_office_id": offices["SECRETARÍA GENERAL"],
    }
    gerente = await login("gerente_municipal")
    denied = await client.post("/api/v1/offices", json=payload, headers=gerente)
    assert denied.status_code == 403

    admin = await login("admin")
    created = await client.post("/api/v1/offices", json=payload, headers=admin)
    assert created.status_code == 201, created.text
    office_id = created.json()["id"]

    duplicate = await client.post("/api/v1/offices", json=payload, headers=admin)
    assert duplicate.status_code == 400

    cycle = await client.patch(
        f"/api/v1/offices/{offices['ALCALDÍA']}/parent",
        json={"parent_office_id": office_id},
        headers=admin,
    )
    assert cycle.status_code == 400

    moved = await client.patch(
        f"/api/v1/offices/{office_id}/parent",
        json={"parent_office_id": offices["ALCALDÍA"]},
        headers=admin,
    )
    assert moved.status_code == 200
    assert moved.json()["parent_office_id"] == offices["ALCALDÍA"]


async def test_dashboard_for_managers_only(client: AsyncClient, login) -> None:
    staff = await login("asistente_obras")
    assert (await client.get("/api/v1/dashboard", headers=staff)).status_code == 403

    manager = await login("gerente_municipal")
    response = await client.get("/api/v1/dashboard", headers=manager)
    assert response.status_code == 200
    body = response.json()
    assert body["status_counts"] == []
    assert body["bottlenecks"] == []
    assert body["office_load"] == []

    too_many = await client.get("/api/v1/dashboard?limit=500", headers=manager)
    assert too_many.status_code == 422
