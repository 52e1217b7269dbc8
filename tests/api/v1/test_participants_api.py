import pytest


@pytest.mark.asyncio
async def test_list_seeds_you(client):
    response = await client.get("/api/v1/participants/")

    assert response.status_code == 200
    data = response.json()
    assert [p["name"] for p in data] == ["YOU"]
    assert data[0]["has_tab"] is False


@pytest.mark.asyncio
async def test_add_participant_is_persisted(client):
    response = await client.post(
        "/api/v1/participants/",
        json={"name": "Alice", "contact_address": "+15551234567"}
    )

    assert response.status_code == 201
    assert response.json()["contact_address"] == "+15551234567"

    listed = (await client.get("/api/v1/participants/")).json()
    assert [p["name"] for p in listed] == ["YOU", "Alice"]


@pytest.mark.asyncio
async def test_add_participant_requires_name(client):
    response = await client.post("/api/v1/participants/", json={"name": ""})

    assert response.status_code == 422
