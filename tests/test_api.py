from datetime import timedelta

from hotel_service.app.backend.models.Booking import BookingStatus
from tests.conftest import ADMIN, GUEST_A, GUEST_B


def _booking_payload(room, check_in, nights=4, **extra):
    payload = {
        "room_id": room.id,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=nights)).isoformat(),
    }
    payload.update(extra)
    return payload


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_read_booking(client, room, tomorrow):
    response = client.post("/bookings", json=_booking_payload(room, tomorrow))

    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "Pending"
    assert booking["guest_id"] == GUEST_A.user_id
    assert booking["room_number"] == "101"
    assert booking["total_price"] == 10000.0

    detail = client.get(f"/bookings/{booking['id']}").json()
    assert detail["payment_summary"] == {
        "total_price": 10000.0,
        "total_paid": 0.0,
        "balance": 10000.0,
        "fully_paid": False,
    }
    assert detail["room_type_name"] == "Standard"


def test_overlapping_booking_returns_conflicts(client, room, tomorrow, make_booking):
    existing = make_booking(
        room, GUEST_B.user_id, tomorrow, tomorrow + timedelta(days=4), BookingStatus.CONFIRMED
    )

    response = client.post("/bookings", json=_booking_payload(room, tomorrow + timedelta(days=2)))

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "conflict"
    assert [c["id"] for c in body["conflicts"]] == [existing.id]


def test_invalid_dates_are_a_validation_error(client, room, tomorrow):
    response = client.post("/bookings", json=_booking_payload(room, tomorrow, nights=0))

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_unknown_status_value_is_rejected(client, room, tomorrow):
    response = client.post("/bookings", json=_booking_payload(room, tomorrow, status="Paid"))

    assert response.status_code == 422


def test_payment_flow_confirms_booking(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow, total_price=10000)).json()

    first = client.post("/payments", json={"booking_id": booking["id"], "amount": 6000, "method": "card"})
    assert first.status_code == 201
    assert first.json()["payment_summary"]["balance"] == 4000.0

    too_much = client.post("/payments", json={"booking_id": booking["id"], "amount": 5000, "method": "card"})
    assert too_much.status_code == 409
    assert too_much.json()["message"] == "Payment amount (5000.00) exceeds remaining balance (4000.00)"

    second = client.post("/payments", json={"booking_id": booking["id"], "amount": 4000, "method": "cash"})
    assert second.json()["payment_summary"]["fully_paid"] is True

    assert client.get(f"/bookings/{booking['id']}").json()["status"] == "Confirmed"

    listing = client.get(f"/payments/booking/{booking['id']}").json()
    assert [p["method"] for p in listing["payments"]] == ["cash", "card"]
    assert [p["balance_after"] for p in listing["payments"]] == [0.0, 4000.0]
    assert listing["payment_summary"]["total_paid"] == 10000.0


def test_unrepresentable_payment_amount_is_a_bad_request(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow)).json()

    for amount in ["1e30", "0.005"]:
        response = client.post("/payments", json={"booking_id": booking["id"], "amount": amount, "method": "card"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    listing = client.get(f"/payments/booking/{booking['id']}").json()
    assert listing["payments"] == []


def test_stranger_cannot_cancel(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow)).json()

    client.act_as(GUEST_B)
    response = client.post(f"/bookings/{booking['id']}/cancel", json={"reason": "not mine"})

    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_owner_cancels_without_body(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow)).json()

    response = client.post(f"/bookings/{booking['id']}/cancel")

    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "Cancelled"
    assert response.json()["room_status"] == "Available"


def test_admin_status_change_and_terminal_state(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow)).json()
    url = f"/bookings/{booking['id']}/status"

    assert client.patch(url, json={"status": "Confirmed"}).status_code == 403

    client.act_as(ADMIN)
    assert client.patch(url, json={"status": "Confirmed"}).json()["booking"]["status"] == "Confirmed"
    assert client.patch(url, json={"status": "Completed"}).json()["room_status"] == "Cleaning"

    response = client.patch(url, json={"status": "Cancelled"})
    assert response.status_code == 409
    assert response.json()["error"] == "invalid_state"


def test_admin_cancel_appears_in_action_log(client, room, tomorrow):
    booking = client.post("/bookings", json=_booking_payload(room, tomorrow)).json()

    client.act_as(ADMIN)
    client.post(f"/bookings/{booking['id']}/cancel", json={"reason": "Overbooked"})

    page = client.get("/admin/actions", params={"action_type": "cancel_booking"}).json()
    assert page["pagination"] == {"total": 1, "limit": 100, "offset": 0, "page": 1, "total_pages": 1}
    assert page["actions"][0]["action_detail"] == f"Cancelled booking #{booking['id']}: Overbooked"


def test_admin_actions_are_admin_only(client):
    assert client.get("/admin/actions").status_code == 403


def test_guest_booking_list_is_scoped(client, room, tomorrow, make_booking):
    make_booking(room, GUEST_B.user_id, tomorrow, tomorrow + timedelta(days=2))
    client.post("/bookings", json=_booking_payload(room, tomorrow + timedelta(days=5)))

    mine = client.get("/bookings").json()
    assert [b["guest_id"] for b in mine] == [GUEST_A.user_id]

    client.act_as(ADMIN)
    assert len(client.get("/bookings").json()) == 2
    assert len(client.get("/bookings", params={"guest_id": GUEST_B.user_id}).json()) == 1


def test_availability_endpoint(client, room, tomorrow, make_booking):
    make_booking(room, GUEST_B.user_id, tomorrow, tomorrow + timedelta(days=2), BookingStatus.CONFIRMED)

    busy = client.get(
        f"/rooms/{room.id}/availability",
        params={"check_in": tomorrow.isoformat(), "check_out": (tomorrow + timedelta(days=1)).isoformat()},
    ).json()
    free = client.get(
        f"/rooms/{room.id}/availability",
        params={
            "check_in": (tomorrow + timedelta(days=2)).isoformat(),
            "check_out": (tomorrow + timedelta(days=3)).isoformat(),
        },
    ).json()

    assert busy["available"] is False
    assert len(busy["conflicts"]) == 1
    assert free == {
        "room_id": room.id,
        "check_in": (tomorrow + timedelta(days=2)).isoformat(),
        "check_out": (tomorrow + timedelta(days=3)).isoformat(),
        "available": True,
        "conflicts": [],
    }


def test_catalog_reads_are_public_and_writes_are_admin_only(client, room):
    assert client.get("/rooms").json()[0]["room_number"] == "101"
    assert client.post("/amenities", json={"name": "Wi-Fi"}).status_code == 403

    client.act_as(ADMIN)
    amenity = client.post("/amenities", json={"name": "Wi-Fi"}).json()
    room_type = client.post(
        "/room-types",
        json={"name": "Suite", "price": 6000, "capacity": 4, "amenity_ids": [amenity["id"]]},
    ).json()
    assert room_type["amenities"] == [{"id": amenity["id"], "name": "Wi-Fi", "description": None}]

    service = client.post("/services", json={"name": "Breakfast", "price": 350}).json()
    link = client.post(
        f"/room-types/{room_type['id']}/services",
        json={"service_id": service["id"], "included": True, "discount_percentage": 20},
    ).json()
    assert link["discount_percentage"] == 0.0
    assert link["service"]["name"] == "Breakfast"

    detail = client.get(f"/rooms/{room.id}").json()
    assert detail["room_type_name"] == "Standard"

    blocked = client.delete(f"/room-types/{room_type['id']}")
    assert blocked.status_code == 409
    assert blocked.json()["amenity_count"] == 1


def test_room_status_override(client, room):
    client.act_as(ADMIN)

    response = client.patch(f"/rooms/{room.id}/status", json={"status": "Occupied"})
    assert response.status_code == 409

    response = client.patch(f"/rooms/{room.id}/status", json={"status": "Maintenance"})
    assert response.json()["status"] == "Maintenance"


def test_room_with_bookings_cannot_be_deleted(client, room, tomorrow, make_booking):
    make_booking(room, GUEST_B.user_id, tomorrow, tomorrow + timedelta(days=2))
    client.act_as(ADMIN)

    response = client.delete(f"/rooms/{room.id}")

    assert response.status_code == 409
    assert response.json()["booking_count"] == 1


def test_recommendations(client, room_type):
    client.act_as(ADMIN)
    service = client.post("/services", json={"name": "Spa", "price": 900}).json()
    created = client.post(
        "/recommendations",
        json={"guest_id": GUEST_A.user_id, "room_type_id": room_type.id, "service_id": service["id"], "reason": "Relax"},
    )
    assert created.status_code == 201

    client.act_as(GUEST_A)
    mine = client.get(f"/recommendations/guest/{GUEST_A.user_id}").json()
    assert [r["service_name"] for r in mine] == ["Spa"]
    assert client.get(f"/recommendations/guest/{GUEST_B.user_id}").status_code == 403


def test_user_directory_endpoints(client):
    assert client.get(f"/users/{GUEST_A.user_id}").json()["login"] == "guest_a"
    assert client.get("/users/999").status_code == 404


def test_user_list_is_admin_only(client):
    response = client.get("/users")
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"

    client.act_as(ADMIN)
    assert len(client.get("/users").json()) == 3
