"""
HTTP-level tests for the property and reservation routers.
"""

from datetime import date, timedelta

import pytest


BASE = date.today() + timedelta(days=30)


def day(offset):
    return (BASE + timedelta(days=offset)).isoformat()


@pytest.fixture
async def listing(client):
    resp = await client.post(
        "/api/properties",
        json={"slug": "beach-house", "title": "Beach House", "price": 120, "city": "Durban"},
    )
    assert resp.status_code == 201
    return resp.json()["data"]


async def book(client, property_id, start, end, **extra):
    return await client.post(
        "/api/reservations",
        json={"property_id": property_id, "from_date": start, "to_date": end, **extra},
    )


async def test_ping(client):
    resp = await client.get("/ping")
    assert resp.json() == {"status": "ok"}


async def test_property_listing_and_detail(client, listing):
    resp = await client.get("/api/properties")
    assert [p["slug"] for p in resp.json()["data"]["items"]] == ["beach-house"]

    resp = await client.get(f"/api/properties/{listing['id']}")
    assert resp.json()["data"]["title"] == "Beach House"

    resp = await client.get("/api/properties/999")
    assert resp.status_code == 404


async def test_duplicate_slug_rejected(client, listing):
    resp = await client.post("/api/properties", json={"slug": "beach-house", "title": "Copy"})
    assert resp.status_code == 400


async def test_create_and_list_reservation(client, listing):
    resp = await book(client, listing["id"], day(0), day(3), guest_name="Ada", guests=2)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["from_date"] == day(0)
    assert data["to_date"] == day(3)
    assert data["guests"] == 2

    resp = await client.get("/api/reservations", params={"property_id": listing["id"]})
    assert len(resp.json()["items"]) == 1


async def test_unavailable_dates_by_slug_and_id(client, listing):
    await book(client, listing["id"], day(0), day(2))
    await book(client, listing["id"], day(9), day(11))

    resp = await client.get("/api/reservations/unavailable-dates", params={"slug": "beach-house"})
    assert resp.status_code == 200
    assert resp.json()["data"]["unavailable_dates"] == [day(0), day(1), day(9), day(10)]

    resp = await client.get(
        "/api/reservations/unavailable-dates", params={"property_id": listing["id"]}
    )
    assert resp.json()["data"]["unavailable_dates"] == [day(0), day(1), day(9), day(10)]


async def test_property_reference_required(client):
    resp = await client.get("/api/reservations/unavailable-dates")
    assert resp.status_code == 400


async def test_unknown_slug_is_404(client):
    resp = await client.get("/api/reservations/unavailable-dates", params={"slug": "nowhere"})
    assert resp.status_code == 404


async def test_availability_endpoint(client, listing):
    await book(client, listing["id"], day(0), day(4))

    params = {"property_id": listing["id"], "start_date": day(3), "end_date": day(6)}
    resp = await client.get("/api/reservations/availability", params=params)
    assert resp.json()["data"]["available"] is False

    params["start_date"] = day(4)
    resp = await client.get("/api/reservations/availability", params=params)
    assert resp.json()["data"] == {
        "property_id": listing["id"],
        "start_date": day(4),
        "end_date": day(6),
        "available": True,
    }


@pytest.mark.parametrize(
    "start, end",
    [("not-a-date", day(2)), (day(2), day(2)), (day(3), day(1))],
)
async def test_invalid_ranges_are_400(client, listing, start, end):
    params = {"property_id": listing["id"], "start_date": start, "end_date": end}
    resp = await client.get("/api/reservations/availability", params=params)
    assert resp.status_code == 400

    resp = await client.get("/api/reservations/suggest-dates", params=params)
    assert resp.status_code == 400

    resp = await book(client, listing["id"], start, end)
    assert resp.status_code == 400


async def test_conflict_returns_alternatives(client, listing):
    await book(client, listing["id"], day(0), day(10))

    resp = await book(client, listing["id"], day(2), day(4))
    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert "overlap" in detail["message"]
    suggestions = detail["alternatives"]["suggestions"]
    assert 0 < len(suggestions) <= 5
    for s in suggestions:
        assert s["start_date"] >= day(10) or s["end_date"] <= day(0)


async def test_booking_unknown_property_is_404(client):
    resp = await book(client, 999, day(0), day(2))
    assert resp.status_code == 404


async def test_suggest_dates_endpoint(client, listing):
    await book(client, listing["id"], day(0), day(5))
    await book(client, listing["id"], day(8), day(20))

    resp = await client.get(
        "/api/reservations/suggest-dates",
        params={"slug": "beach-house", "start_date": day(2), "end_date": day(5)},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["requested_range"] == {"start_date": day(2), "end_date": day(5), "nights": 3}
    assert data["suggestions"][0] == {
        "start_date": day(5),
        "end_date": day(8),
        "nights": 3,
        "days_from_original": 3,
        "direction": "after",
    }
    assert {"start": day(5), "end": day(8), "nights": 3} in data["available_gaps"]
    assert data["message"].startswith("Found")


async def test_suggest_dates_duration_must_be_positive(client, listing):
    params = {
        "property_id": listing["id"],
        "start_date": day(0),
        "end_date": day(2),
        "duration": 0,
    }
    resp = await client.get("/api/reservations/suggest-dates", params=params)
    assert resp.status_code == 422


async def test_cancel_reservation(client, listing):
    created = (await book(client, listing["id"], day(0), day(3))).json()["data"]

    resp = await client.delete(f"/api/reservations/{created['id']}")
    assert resp.json() == {"message": "cancelled"}

    resp = await book(client, listing["id"], day(0), day(3))
    assert resp.status_code == 201

    resp = await client.delete(f"/api/reservations/{created['id']}")
    assert resp.status_code == 404
