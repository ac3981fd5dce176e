# tests/test_rooms_router.py
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from roombooking.main import app
from roombooking.models import UserRole

client = TestClient(app)


@pytest.fixture
def headers(db, make_user, auth_headers):
    make_user("alice", role=UserRole.ADMIN)
    make_user("bob")
    return {"admin": auth_headers(client, "alice"), "bob": auth_headers(client, "bob")}


def _room_payload(name="Aurora", **overrides):
    payload = {
        "name": name,
        "location": "Floor 1",
        "capacity": 8,
        "description": "Corner room with a view",
        "amenities": ["Projector", "Whiteboard"],
    }
    payload.update(overrides)
    return payload


def _book_and_confirm(headers, room_id, on, start="09:00:00", end="10:00:00"):
    booking = client.post(
        "/api/booking-requests",
        json={
            "room_id": room_id,
            "date": on.isoformat(),
            "start_time": start,
            "end_time": end,
            "purpose": "Customer demo preparation",
        },
        headers=headers["bob"],
    ).json()
    resp = client.post(f"/api/booking-requests/{booking['id']}/confirm", headers=headers["admin"])
    assert resp.status_code == 200, resp.text
    return booking


def test_admin_manages_rooms(headers):
    resp = client.post("/api/rooms", json=_room_payload(), headers=headers["admin"])
    assert resp.status_code == 201, resp.text
    room = resp.json()
    assert room["name"] == "Aurora"
    assert room["amenities"] == ["Projector", "Whiteboard"]
    assert room["image_urls"] == []

    resp = client.put(
        f"/api/rooms/{room['id']}",
        json=_room_payload(capacity=12, location="Floor 4"),
        headers=headers["admin"],
    )
    assert resp.status_code == 200
    assert resp.json()["capacity"] == 12
    assert resp.json()["location"] == "Floor 4"

    resp = client.get(f"/api/rooms/{room['id']}", headers=headers["bob"])
    assert resp.status_code == 200

    resp = client.delete(f"/api/rooms/{room['id']}", headers=headers["admin"])
    assert resp.status_code == 204

    resp = client.get(f"/api/rooms/{room['id']}", headers=headers["bob"])
    assert resp.status_code == 404
    assert resp.json()["code"] == "room_not_found"


def test_duplicate_room_name_is_rejected(headers):
    client.post("/api/rooms", json=_room_payload(), headers=headers["admin"])

    resp = client.post("/api/rooms", json=_room_payload(name="AURORA"), headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["code"] == "duplicate_room_name"


def test_employees_cannot_manage_rooms(headers):
    resp = client.post("/api/rooms", json=_room_payload(), headers=headers["bob"])
    assert resp.status_code == 403


@pytest.mark.parametrize("overrides", [{"capacity": 0}, {"name": "   "}, {"location": ""}])
def test_invalid_room_payloads(headers, overrides):
    resp = client.post("/api/rooms", json=_room_payload(**overrides), headers=headers["admin"])
    assert resp.status_code == 422


def test_list_rooms_with_filters(headers):
    for name, capacity in (("Aurora", 4), ("Borealis", 12), ("Cascade", 20)):
        client.post("/api/rooms", json=_room_payload(name=name, capacity=capacity), headers=headers["admin"])

    resp = client.get("/api/rooms", headers=headers["bob"])
    assert [r["name"] for r in resp.json()] == ["Aurora", "Borealis", "Cascade"]

    resp = client.get("/api/rooms", params={"min_capacity": 10}, headers=headers["bob"])
    assert [r["name"] for r in resp.json()] == ["Borealis", "Cascade"]

    resp = client.get("/api/rooms", params={"search": "casc"}, headers=headers["bob"])
    assert [r["name"] for r in resp.json()] == ["Cascade"]


def test_room_with_upcoming_booking_cannot_be_deleted(headers):
    room = client.post("/api/rooms", json=_room_payload(), headers=headers["admin"]).json()
    _book_and_confirm(headers, room["id"], date.today() + timedelta(days=3))

    resp = client.delete(f"/api/rooms/{room['id']}", headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["code"] == "room_has_active_bookings"


def test_schedule_shows_todays_confirmed_bookings(headers):
    aurora = client.post("/api/rooms", json=_room_payload(), headers=headers["admin"]).json()
    client.post("/api/rooms", json=_room_payload(name="Borealis"), headers=headers["admin"])
    _book_and_confirm(headers, aurora["id"], date.today(), start="16:00:00", end="17:00:00")
    _book_and_confirm(headers, aurora["id"], date.today() + timedelta(days=1))

    resp = client.get("/api/rooms/schedule", headers=headers["bob"])
    assert resp.status_code == 200
    schedule = {r["name"]: r for r in resp.json()}
    assert [b["start_time"] for b in schedule["Aurora"]["bookings"]] == ["16:00:00"]
    assert schedule["Aurora"]["bookings"][0]["employee_name"] == "Bob Tester"
    assert schedule["Borealis"]["bookings"] == []
