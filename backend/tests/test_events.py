"""
Tests for event endpoints and the health check.
"""

from datetime import datetime, timezone, timedelta

import pytest
from bson import ObjectId
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient):
    future_date = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
    response = await client.post(
        "/api/v1/events/",
        json={
            "title": "Python Conference 2026",
            "description": "Annual Python gathering",
            "date": future_date,
            "location": "Convention Center",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Python Conference 2026"
    assert ObjectId.is_valid(data["id"])
    assert data["createdAt"] == data["updatedAt"]


@pytest.mark.asyncio
async def test_create_event_requires_title(client: AsyncClient):
    response = await client.post("/api/v1/events/", json={"description": "untitled"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/v1/events/{test_event.id}")
    assert response.status_code == 200
    assert response.json()["title"] == "Test Concert"


@pytest.mark.asyncio
@pytest.mark.parametrize("event_id", [str(ObjectId()), "not-an-id"])
async def test_get_event_not_found(client: AsyncClient, event_id):
    response = await client.get(f"/api/v1/events/{event_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_event_bookings(client: AsyncClient, test_event):
    for email in ("one@example.com", "two@example.com"):
        await client.post(
            "/api/v1/bookings/",
            json={"eventId": str(test_event.id), "email": email},
        )

    response = await client.get(f"/api/v1/events/{test_event.id}/bookings")

    assert response.status_code == 200
    assert sorted(b["email"] for b in response.json()) == ["one@example.com", "two@example.com"]


@pytest.mark.asyncio
async def test_delete_event_keeps_bookings(client: AsyncClient, db, test_event):
    await client.post(
        "/api/v1/bookings/",
        json={"eventId": str(test_event.id), "email": "fan@example.com"},
    )

    response = await client.delete(f"/api/v1/events/{test_event.id}")

    assert response.status_code == 204
    assert (await client.get(f"/api/v1/events/{test_event.id}")).status_code == 404
    assert len(db["bookings"].documents) == 1


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"
