from __future__ import annotations

import pytest

API = "/api/v1"


@pytest.fixture()
def desk(receptionist, auth_headers):
    return auth_headers(receptionist)


def _booking_payload(room, guest_details, check_in="2030-06-01", check_out="2030-06-04", **extra):
    return {
        "guest": guest_details,
        "room_id": room.id,
        "check_in": check_in,
        "check_out": check_out,
        **extra,
    }


def test_health(client):
    resp = client.get(f"{API}/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["database"] == "ok"


def test_requests_without_identity_are_unauthenticated(client, rooms):
    resp = client.get(f"{API}/rooms")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    resp = client.get(f"{API}/rooms", headers={"X-User-Id": "x", "X-User-Role": "janitor"})
    assert resp.status_code == 401


def test_request_id_is_echoed(client, desk, rooms):
    resp = client.get(f"{API}/rooms", headers={**desk, "X-Request-ID": "req-123"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "req-123"


def test_available_rooms(client, desk, rooms):
    resp = client.get(f"{API}/rooms/available", params={"min_capacity": 2}, headers=desk)
    assert resp.status_code == 200
    assert [r["number"] for r in resp.json()] == ["102", "201"]
    assert all(r["status"] == "available" for r in resp.json())


def test_full_stay_over_http(client, desk, admin, auth_headers, rooms, guest_details):
    resp = client.post(f"{API}/bookings", json=_booking_payload(rooms["101"], guest_details), headers=desk)
    assert resp.status_code == 201, resp.text
    booking = resp.json()
    assert booking["nights"] == 3
    assert booking["total_amount"] == 15000
    assert booking["paid_amount"] == 0
    assert booking["balance"] == 15000
    assert booking["status"] == "confirmed"
    assert booking["payment_status"] == "pending"
    booking_id = booking["id"]

    resp = client.post(
        f"{API}/bookings/{booking_id}/payments",
        json={"amount": 15000, "method": "mpesa", "transaction_id": "QWE123"},
        headers=desk,
    )
    assert resp.status_code == 201, resp.text
    receipt = resp.json()
    assert receipt["payment"]["amount"] == 15000
    assert receipt["booking"]["balance"] == 0
    assert receipt["booking"]["payment_status"] == "paid"

    resp = client.post(f"{API}/bookings/{booking_id}/check-in", headers=desk)
    assert resp.json()["status"] == "checked_in"
    assert client.get(f"{API}/rooms/{rooms['101'].id}", headers=desk).json()["status"] == "occupied"

    resp = client.post(f"{API}/bookings/{booking_id}/check-out", headers=desk)
    assert resp.json()["status"] == "checked_out"
    assert client.get(f"{API}/rooms/{rooms['101'].id}", headers=desk).json()["status"] == "cleaning"

    history = client.get(f"{API}/bookings/{booking_id}/history", headers=desk).json()
    assert [h["to_status"] for h in history] == ["confirmed", "checked_in", "checked_out"]

    invoice = client.get(f"{API}/bookings/{booking_id}/invoice", headers=desk).json()
    assert invoice["total"] == 15000
    assert invoice["balance"] == 0
    assert invoice["currency"] == "KES"

    tasks = client.get(f"{API}/housekeeping/tasks", headers=desk).json()
    assert len(tasks) == 1
    assert tasks[0]["booking_id"] == booking_id


def test_domain_errors_map_to_http_status(client, desk, rooms, guest_details):
    resp = client.post(f"{API}/bookings", json=_booking_payload(rooms["202"], guest_details), headers=desk)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "ROOM_UNAVAILABLE"

    resp = client.post(
        f"{API}/bookings",
        json=_booking_payload(rooms["101"], guest_details, check_in="2030-06-04", check_out="2030-06-01"),
        headers=desk,
    )
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "INVALID_DATE_RANGE"

    booking_id = client.post(
        f"{API}/bookings", json=_booking_payload(rooms["101"], guest_details), headers=desk
    ).json()["id"]

    resp = client.post(f"{API}/bookings/{booking_id}/check-out", headers=desk)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "INVALID_TRANSITION"

    resp = client.post(f"{API}/bookings/{booking_id}/payments", json={"amount": 15001, "method": "cash"}, headers=desk)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "OVERPAYMENT_REJECTED"

    resp = client.post(f"{API}/bookings/{booking_id}/payments", json={"amount": 0, "method": "cash"}, headers=desk)
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    resp = client.get(f"{API}/bookings/does-not-exist", headers=desk)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


def test_request_validation_errors_use_error_envelope(client, desk, rooms):
    resp = client.post(f"{API}/bookings", json={"room_id": rooms["101"].id}, headers=desk)
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field_errors"]


def test_cancel_with_reason(client, desk, rooms, guest_details):
    booking_id = client.post(
        f"{API}/bookings", json=_booking_payload(rooms["101"], guest_details), headers=desk
    ).json()["id"]
    resp = client.post(f"{API}/bookings/{booking_id}/cancel", json={"reason": "Flight cancelled"}, headers=desk)
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"
    assert resp.json()["cancellation_reason"] == "Flight cancelled"


def test_pricing_quote(client, desk, rooms):
    resp = client.post(
        f"{API}/pricing/quote",
        json={"room_id": rooms["101"].id, "check_in": "2024-03-01", "check_out": "2024-03-04", "apply_default_tax": True},
        headers=desk,
    )
    assert resp.status_code == 200, resp.text
    quote = resp.json()
    assert quote["nights"] == 3
    assert quote["subtotal"] == 15000
    assert quote["tax"] == 2400
    assert quote["total"] == 17400

    resp = client.post(
        f"{API}/pricing/quote",
        json={"nightly_rate": 5000, "check_in": "2024-01-01T22:00:00", "check_out": "2024-01-02T02:00:00"},
        headers=desk,
    )
    assert resp.json()["nights"] == 1
    assert resp.json()["tax"] is None


def test_permissions_over_http(client, desk, rooms, guest_user, housekeeper, auth_headers, guest_details):
    resp = client.post(
        f"{API}/rooms",
        json={"number": "401", "type": "suite", "price": 18000, "capacity": 2},
        headers=desk,
    )
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "AUTHORIZATION_FAILED"

    resp = client.get(f"{API}/reports/summary", headers=desk)
    assert resp.status_code == 403

    resp = client.get(f"{API}/guests", headers=auth_headers(housekeeper))
    assert resp.status_code == 403

    booking_id = client.post(
        f"{API}/bookings", json=_booking_payload(rooms["101"], guest_details), headers=auth_headers(guest_user)
    ).json()["id"]
    mine = client.get(f"{API}/bookings/mine", headers=auth_headers(guest_user)).json()
    assert [b["id"] for b in mine] == [booking_id]
    resp = client.delete(f"{API}/bookings/{booking_id}", headers=desk)
    assert resp.status_code == 403


def test_admin_reports_and_delete(client, admin, desk, auth_headers, rooms, guest_details):
    booking_id = client.post(
        f"{API}/bookings", json=_booking_payload(rooms["101"], guest_details), headers=desk
    ).json()["id"]
    client.post(f"{API}/bookings/{booking_id}/payments", json={"amount": 5000, "method": "cash"}, headers=desk)

    summary = client.get(f"{API}/reports/summary", headers=auth_headers(admin)).json()
    assert summary["total_collected"] == 5000
    assert summary["outstanding"] == 10000
    assert summary["total_rooms"] == 5

    resp = client.delete(f"{API}/bookings/{booking_id}", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert client.get(f"{API}/bookings/{booking_id}", headers=desk).status_code == 404


def test_housekeeping_flow_over_http(client, admin, housekeeper, auth_headers, rooms):
    resp = client.post(
        f"{API}/housekeeping/tasks",
        json={"room_id": rooms["202"].id, "assigned_to": "Hana Keeper", "task_type": "deep_clean"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 201, resp.text
    task_id = resp.json()["id"]

    client.patch(f"{API}/rooms/{rooms['202'].id}/status", json={"status": "cleaning"}, headers=auth_headers(housekeeper))

    mine = client.get(f"{API}/housekeeping/tasks/mine", headers=auth_headers(housekeeper)).json()
    assert [t["id"] for t in mine] == [task_id]

    hk = auth_headers(housekeeper)
    assert client.patch(f"{API}/housekeeping/tasks/{task_id}/status", json={"status": "in_progress"}, headers=hk).status_code == 200
    resp = client.patch(f"{API}/housekeeping/tasks/{task_id}/status", json={"status": "completed"}, headers=hk)
    assert resp.json()["status"] == "completed"
    assert client.get(f"{API}/rooms/{rooms['202'].id}", headers=hk).json()["status"] == "available"
