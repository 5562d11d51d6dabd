"""Tests for physician endpoints."""

import pytest
from httpx import AsyncClient

from tests.conftest import create_physician


@pytest.mark.asyncio
async def test_create_physician(client_a: AsyncClient, user_a: dict, physician_data: dict) -> None:
    """Test creating a physician."""
    response = await client_a.post("/api/physicians", json=physician_data)
    assert response.status_code == 201
    data = response.json()
    assert data["firstName"] == "Sarah"
    assert data["officeHours"] == "Mon-Fri 9-5"
    assert data["userId"] == user_a["id"]
    assert data["address"] is None
    assert "id" in data
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_create_ignores_client_user_id(
    client_a: AsyncClient,
    user_a: dict,
    user_b: dict,
    physician_data: dict,
) -> None:
    """The owner is always the session user."""
    physician = await create_physician(client_a, {**physician_data, "userId": user_b["id"]})
    assert physician["userId"] == user_a["id"]


@pytest.mark.asyncio
async def test_create_physician_validation(client_a: AsyncClient, physician_data: dict) -> None:
    """Missing required fields and malformed email are reported per field."""
    payload = {**physician_data, "email": "not-an-email"}
    del payload["phone"]

    response = await client_a.post("/api/physicians", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid data"
    fields = {error["field"] for error in body["errors"]}
    assert fields == {"phone", "email"}


@pytest.mark.asyncio
async def test_blank_optional_fields_stored_as_null(
    client_a: AsyncClient, physician_data: dict
) -> None:
    physician = await create_physician(client_a, {**physician_data, "email": "", "address": " "})
    assert physician["email"] is None
    assert physician["address"] is None


@pytest.mark.asyncio
async def test_list_is_isolated_per_user(
    client_a: AsyncClient,
    client_b: AsyncClient,
    physician_data: dict,
) -> None:
    """A's physicians never show up in B's list, even when B asks for them."""
    mine = await create_physician(client_a, physician_data)
    await create_physician(client_b, {**physician_data, "lastName": "Other"})

    response = await client_a.get("/api/physicians")
    assert [p["id"] for p in response.json()] == [mine["id"]]

    response = await client_b.get("/api/physicians", params={"userId": mine["userId"]})
    assert response.status_code == 200
    assert [p["lastName"] for p in response.json()] == ["Other"]


@pytest.mark.asyncio
async def test_list_in_creation_order(client_a: AsyncClient, physician_data: dict) -> None:
    for name in ("First", "Second", "Third"):
        await create_physician(client_a, {**physician_data, "lastName": name})

    response = await client_a.get("/api/physicians")
    assert [p["lastName"] for p in response.json()] == ["First", "Second", "Third"]


@pytest.mark.asyncio
async def test_update_physician(client_a: AsyncClient, physician_data: dict) -> None:
    """Partial update changes only the fields sent; identity fields are ignored."""
    physician = await create_physician(client_a, physician_data)

    response = await client_a.put(
        f"/api/physicians/{physician['id']}",
        json={
            "specialty": "Internal Medicine",
            "id": "forged",
            "userId": "forged",
            "createdAt": "2000-01-01T00:00:00Z",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["specialty"] == "Internal Medicine"
    assert data["firstName"] == "Sarah"
    assert data["id"] == physician["id"]
    assert data["userId"] == physician["userId"]
    assert data["createdAt"] == physician["createdAt"]


@pytest.mark.asyncio
async def test_update_can_clear_optional_field(client_a: AsyncClient, physician_data: dict):
    physician = await create_physician(client_a, physician_data)

    response = await client_a.put(
        f"/api/physicians/{physician['id']}", json={"email": None, "lastName": None}
    )
    assert response.status_code == 200
    assert response.json()["email"] is None
    # Required fields are not nulled out
    assert response.json()["lastName"] == "Johnson"


@pytest.mark.asyncio
async def test_update_validation(client_a: AsyncClient, physician_data: dict) -> None:
    physician = await create_physician(client_a, physician_data)

    response = await client_a.put(f"/api/physicians/{physician['id']}", json={"phone": ""})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "phone"


@pytest.mark.asyncio
async def test_update_unknown_physician(client_a: AsyncClient) -> None:
    response = await client_a.put("/api/physicians/missing", json={"specialty": "X"})
    assert response.status_code == 404
    assert response.json()["message"] == "Physician not found"


@pytest.mark.asyncio
async def test_other_user_cannot_modify(
    client_a: AsyncClient,
    client_b: AsyncClient,
    physician_data: dict,
) -> None:
    """B gets 403 on A's physician and A's record is untouched."""
    physician = await create_physician(client_a, physician_data)

    response = await client_b.put(f"/api/physicians/{physician['id']}", json={"phone": "1"})
    assert response.status_code == 403

    response = await client_b.delete(f"/api/physicians/{physician['id']}")
    assert response.status_code == 403

    response = await client_a.get("/api/physicians")
    assert response.json()[0]["phone"] == physician_data["phone"]


@pytest.mark.asyncio
async def test_delete_is_idempotent(client_a: AsyncClient, physician_data: dict) -> None:
    """Existing id: 204 once, then 404. Unknown id: always 404."""
    physician = await create_physician(client_a, physician_data)

    response = await client_a.delete(f"/api/physicians/{physician['id']}")
    assert response.status_code == 204

    response = await client_a.delete(f"/api/physicians/{physician['id']}")
    assert response.status_code == 404

    for _ in range(2):
        response = await client_a.delete("/api/physicians/never-existed")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient) -> None:
    assert (await client.get("/api/physicians")).status_code == 401
    assert (await client.delete("/api/physicians/any")).status_code == 401
