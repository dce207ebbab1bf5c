"""
HTTP tests for the appointments router.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from salon_booking.main import create_app
from salon_booking.wiring.dependencies import build_container

ORGANIZER = {"X-User-Id": "organizer-1"}


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def create(client: TestClient, start: str = "2024-06-10T10:00:00+00:00", stylist_id: str = "stylist-1"):
    return client.post(
        "/api/v1/appointments",
        json={
            "client_id": "client-1",
            "date_time": start,
            "service_ids": ["haircut"],
            "duration": 60,
            "stylist_id": stylist_id,
        },
        headers=ORGANIZER,
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "test"}


def test_unreadable_store_answers_service_unavailable(test_settings, clock, tmp_path):
    settings = test_settings.model_copy(update={"STORE_PROVIDER": "json"})
    (tmp_path / "appointments.json").write_text("{broken", encoding="utf-8")
    client = TestClient(create_app(build_container(settings, clock=clock)))

    assert client.get("/api/v1/appointments", params={"client_id": "client-1"}).status_code == 503
    assert create(client).status_code == 503


def test_create_and_fetch(client):
    response = create(client)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["duration"] == 60

    fetched = client.get(f"/api/v1/appointments/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


def test_error_mapping(client):
    assert create(client).status_code == 201
    assert create(client, start="2024-06-10T10:30:00+00:00").status_code == 409
    assert create(client, start="2024-06-09T10:00:00+00:00").status_code == 422
    assert create(client, stylist_id="ghost").status_code == 404
    assert client.get("/api/v1/appointments/missing").status_code == 404
    assert client.get("/api/v1/availability", params={"date": "June 10"}).status_code == 400


def test_requester_header_is_required(client):
    response = client.post(
        "/api/v1/appointments",
        json={"client_id": "client-1", "date_time": "2024-06-10T10:00:00+00:00", "service_ids": ["haircut"]},
    )
    assert response.status_code == 422


def test_confirm_cancel_and_permissions(client):
    appointment_id = create(client).json()["id"]

    denied = client.post(f"/api/v1/appointments/{appointment_id}/confirm", headers={"X-User-Id": "client-2"})
    assert denied.status_code == 403

    confirmed = client.post(
        f"/api/v1/appointments/{appointment_id}/confirm",
        json={"notes": "Booked by phone"},
        headers={"X-User-Id": "stylist-1"},
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"

    cancelled = client.post(
        f"/api/v1/appointments/{appointment_id}/cancel",
        json={"reason": "Travel", "cancelled_by": "client"},
        headers={"X-User-Id": "client-1"},
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "CANCELLED"

    again = client.post(f"/api/v1/appointments/{appointment_id}/start", headers=ORGANIZER)
    assert again.status_code == 422


def test_patch_and_delete(client):
    appointment_id = create(client).json()["id"]

    patched = client.patch(
        f"/api/v1/appointments/{appointment_id}",
        json={"date_time": "2024-06-10T15:00:00+00:00"},
        headers=ORGANIZER,
    )
    assert patched.status_code == 200
    assert patched.json()["start_time"].startswith("2024-06-10T15:00:00")

    refused = client.delete(f"/api/v1/appointments/{appointment_id}", headers={"X-User-Id": "client-2"})
    assert refused.status_code == 403

    deleted = client.delete(f"/api/v1/appointments/{appointment_id}", headers=ORGANIZER)
    assert deleted.status_code == 200
    assert deleted.json() == {"id": appointment_id, "deleted": True}
    assert client.get(f"/api/v1/appointments/{appointment_id}").status_code == 404


def test_availability_and_statistics(client):
    create(client)
    availability = client.get("/api/v1/availability", params={"date": "2024-06-10", "stylist_id": "stylist-1"})
    assert availability.status_code == 200
    body = availability.json()
    assert body["is_working_day"] is True
    assert body["total_slots"] == 18
    assert body["available_slots"] == 16

    stats = client.get("/api/v1/appointments/statistics")
    assert stats.status_code == 200
    assert stats.json()["pending"] == 1


def test_list_by_client(client):
    create(client)
    listed = client.get("/api/v1/appointments", params={"client_id": "client-1"})
    assert listed.status_code == 200
    assert len(listed.json()) == 1
    assert client.get("/api/v1/appointments").status_code == 400


def test_admin_routes(client):
    schedules = client.get("/api/v1/schedules")
    assert schedules.status_code == 200
    assert len(schedules.json()) == 6

    holiday = client.post("/api/v1/holidays", json={"name": "Closed", "date": "2024-06-11"})
    assert holiday.status_code == 201
    closed = client.get("/api/v1/availability", params={"date": "2024-06-11"})
    assert closed.json()["is_working_day"] is False

    statuses = client.get("/api/v1/statuses").json()
    assert len(statuses) == 6
    pending = statuses[0]
    updated = client.patch(f"/api/v1/statuses/{pending['id']}", json={"description": "Waiting"})
    assert updated.json()["description"] == "Waiting"
