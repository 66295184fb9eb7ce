"""Tests for caller identity handling on the API boundary."""


async def test_missing_identity_is_401(async_client):
    response = await async_client.get("/api/purchases")
    assert response.status_code == 401

    data = response.json()
    assert data["error_code"] == "UNAUTHENTICATED"
    assert data["path"] == "/api/purchases"
    assert data["hint"]


async def test_role_without_subject_is_401(async_client):
    response = await async_client.get("/api/purchases", headers={"X-Role": "admin"})
    assert response.status_code == 401


async def test_unknown_role_is_403(async_client, identity):
    response = await async_client.get("/api/purchases", headers=identity(9, "quartermaster"))
    assert response.status_code == 403
    assert response.json()["error_code"] == "FORBIDDEN"


async def test_malformed_subject_is_401(async_client):
    response = await async_client.get(
        "/api/purchases", headers={"X-Subject-Id": "abc", "X-Role": "admin"}
    )
    assert response.status_code == 401


async def test_scoped_role_without_base_is_403(async_client, identity):
    response = await async_client.get(
        "/api/inventory", headers=identity(5, "logistics_officer")
    )
    assert response.status_code == 403
    assert "not assigned" in response.json()["message"]
