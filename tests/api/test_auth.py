"""Auth endpoints: sign-in by username, e-mail or DNI, and bearer resolution."""

from httpx import AsyncClient

from tests.fakes import TEST_PASSWORD


async def test_login_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login_by_each_identifier(client: AsyncClient) -> None:
    for identifier in ("jefe_utics", "utics@sanjeronimo.gob.pe", "44444444"):
        response = await client.post(
            "/api/v1/auth/login",
            json={"identifier": identifier, "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == "jefe_utics"
        assert data["user"]["role"] == "JEFE_OFICINA"
        assert "password_hash" not in data["user"]


async def test_login_wrong_password_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"identifier": "admin", "password": "incorrecta"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"

    unknown = await client.post(
        "/api/v1/auth/login",
        json={"identifier": "nadie", "password": "incorrecta"},
    )
    assert unknown.status_code == 401
    assert unknown.json()["message"] == response.json()["message"]


async def test_me_reflects_the_token_subject(client: AsyncClient, login) -> None:
    headers = await login("gerente_obras")
    response = await client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["role"] == "GERENTE"


async def test_me_requires_a_valid_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token inválido o expirado"
