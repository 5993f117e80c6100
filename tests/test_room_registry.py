from datetime import date
from decimal import Decimal

import pytest

from hotel_service.app.backend.models.AdminAction import AdminAction
from hotel_service.app.backend.models.Amenity import Amenity
from hotel_service.app.backend.models.Booking import BookingStatus
from hotel_service.app.backend.models.Room import Room, RoomStatus
from hotel_service.app.backend.models.Service import Service
from hotel_service.app.backend.services import catalog_service, room_registry
from hotel_service.app.backend.services.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from tests.conftest import ADMIN, GUEST_A

TODAY = date(2024, 5, 20)


@pytest.fixture
def service(db_session):
    breakfast = Service(name="Breakfast", price=Decimal("350.00"), description="Buffet")
    db_session.add(breakfast)
    db_session.commit()
    return breakfast


@pytest.fixture
def amenity(db_session):
    wifi = Amenity(name="Wi-Fi")
    db_session.add(wifi)
    db_session.commit()
    return wifi


# ---------- номери ----------

def test_create_room(db_session, room_type):
    room = room_registry.create_room(db_session, "202", room_type.id)

    assert room.status == RoomStatus.AVAILABLE
    assert room.room_type.name == "Standard"


def test_room_number_is_unique(db_session, room):
    with pytest.raises(ConflictError):
        room_registry.create_room(db_session, "101", room.room_type_id)


def test_new_room_cannot_be_occupied(db_session, room_type):
    with pytest.raises(ValidationError):
        room_registry.create_room(db_session, "303", room_type.id, RoomStatus.OCCUPIED)


def test_create_room_with_unknown_type(db_session):
    with pytest.raises(NotFoundError):
        room_registry.create_room(db_session, "404", 999)


def test_update_room_number(db_session, room):
    room_registry.update_room(db_session, room.id, room_number="101A")

    assert room.room_number == "101A"


def test_update_room_requires_a_field(db_session, room):
    with pytest.raises(ValidationError):
        room_registry.update_room(db_session, room.id)


def test_update_room_number_clash(db_session, room, room_type):
    other = room_registry.create_room(db_session, "102", room_type.id)

    with pytest.raises(ConflictError):
        room_registry.update_room(db_session, other.id, room_number="101")


def test_room_with_bookings_cannot_be_deleted(db_session, room, make_booking):
    make_booking(room, GUEST_A.user_id, date(2024, 6, 1), date(2024, 6, 3), BookingStatus.CANCELLED)

    with pytest.raises(StateError) as exc_info:
        room_registry.delete_room(db_session, room.id)

    assert exc_info.value.extra == {"booking_count": 1}
    assert db_session.query(Room).count() == 1


def test_delete_free_room(db_session, room):
    room_registry.delete_room(db_session, room.id)

    assert db_session.query(Room).count() == 0


def test_list_rooms_by_status(db_session, room, room_type):
    room_registry.create_room(db_session, "102", room_type.id, RoomStatus.MAINTENANCE)

    rooms = room_registry.list_rooms(db_session, status=RoomStatus.MAINTENANCE)

    assert [r.room_number for r in rooms] == ["102"]


# ---------- ручна зміна статусу ----------

def test_only_admin_overrides_status(db_session, room):
    with pytest.raises(AuthorizationError):
        room_registry.set_room_status(db_session, room.id, RoomStatus.CLEANING, GUEST_A, today=TODAY)


def test_free_room_status_can_change(db_session, room):
    room_registry.set_room_status(db_session, room.id, RoomStatus.MAINTENANCE, ADMIN, today=TODAY)

    assert room.status == RoomStatus.MAINTENANCE


def test_occupied_requires_confirmed_booking_for_today(db_session, room, make_booking):
    make_booking(room, GUEST_A.user_id, date(2024, 6, 1), date(2024, 6, 3), BookingStatus.CONFIRMED)

    with pytest.raises(StateError):
        room_registry.set_room_status(db_session, room.id, RoomStatus.OCCUPIED, ADMIN, today=TODAY)
    assert room.status == RoomStatus.AVAILABLE


def test_occupied_with_confirmed_booking_for_today(db_session, room, make_booking):
    make_booking(room, GUEST_A.user_id, TODAY, date(2024, 5, 22), BookingStatus.CONFIRMED)

    room_registry.set_room_status(db_session, room.id, RoomStatus.OCCUPIED, ADMIN, today=TODAY)

    assert room.status == RoomStatus.OCCUPIED


def test_leaving_occupied_needs_force(db_session, room, make_booking):
    booking = make_booking(room, GUEST_A.user_id, TODAY, date(2024, 5, 22), BookingStatus.CONFIRMED)
    room.status = RoomStatus.OCCUPIED
    db_session.commit()

    with pytest.raises(StateError) as exc_info:
        room_registry.set_room_status(db_session, room.id, RoomStatus.MAINTENANCE, ADMIN, today=TODAY)

    assert exc_info.value.extra == {"booking_id": booking.id}
    assert room.status == RoomStatus.OCCUPIED
    assert db_session.query(AdminAction).count() == 0


def test_forced_override_is_applied_and_logged(db_session, room, make_booking):
    booking = make_booking(room, GUEST_A.user_id, TODAY, date(2024, 5, 22), BookingStatus.CONFIRMED)
    room.status = RoomStatus.OCCUPIED
    db_session.commit()

    room_registry.set_room_status(db_session, room.id, RoomStatus.MAINTENANCE, ADMIN, force=True, today=TODAY)

    assert room.status == RoomStatus.MAINTENANCE
    action = db_session.query(AdminAction).one()
    assert action.action_type == "override_room_status"
    assert f"booking #{booking.id}" in action.action_detail


# ---------- типи номерів ----------

def test_create_room_type_with_amenities(db_session, amenity):
    room_type = room_registry.create_room_type(
        db_session, "Suite", Decimal("6000"), 4, "Sea view", amenity_ids=[amenity.id]
    )

    assert [a.name for a in room_type.amenities] == ["Wi-Fi"]


def test_create_room_type_with_unknown_amenity(db_session):
    with pytest.raises(NotFoundError):
        room_registry.create_room_type(db_session, "Suite", Decimal("6000"), 4, amenity_ids=[42])


@pytest.mark.parametrize("price, capacity", [(Decimal("0"), 2), (Decimal("100"), 0), (Decimal("0.004"), 2)])
def test_room_type_price_and_capacity_are_positive(db_session, price, capacity):
    with pytest.raises(ValidationError):
        room_registry.create_room_type(db_session, "Broken", price, capacity)


def test_update_room_type_replaces_and_clears_amenities(db_session, room_type, amenity):
    room_registry.update_room_type(
        db_session, room_type.id, "Standard", Decimal("2600"), 2, amenity_ids=[amenity.id]
    )
    assert [a.id for a in room_type.amenities] == [amenity.id]
    assert room_type.price == Decimal("2600")

    room_registry.update_room_type(db_session, room_type.id, "Standard", Decimal("2600"), 2)
    assert [a.id for a in room_type.amenities] == [amenity.id]

    room_registry.update_room_type(db_session, room_type.id, "Standard", Decimal("2600"), 2, amenity_ids=[])
    assert room_type.amenities == []


def test_room_type_in_use_cannot_be_deleted(db_session, room):
    with pytest.raises(StateError) as exc_info:
        room_registry.delete_room_type(db_session, room.room_type_id)

    assert exc_info.value.extra == {"room_count": 1}


def test_room_type_with_links_cannot_be_deleted(db_session, amenity, service):
    room_type = room_registry.create_room_type(db_session, "Loft", Decimal("3000"), 2, amenity_ids=[amenity.id])
    room_registry.assign_service(db_session, room_type.id, service.id)

    with pytest.raises(StateError) as exc_info:
        room_registry.delete_room_type(db_session, room_type.id)

    assert exc_info.value.extra == {"amenity_count": 1, "service_count": 1}


def test_delete_unused_room_type(db_session):
    room_type = room_registry.create_room_type(db_session, "Loft", Decimal("3000"), 2)

    room_registry.delete_room_type(db_session, room_type.id)

    with pytest.raises(NotFoundError):
        room_registry.get_room_type(db_session, room_type.id)


def test_room_counts_by_type(db_session, room, room_type):
    room_registry.create_room(db_session, "102", room_type.id)

    assert room_registry.room_counts_by_type(db_session) == {room_type.id: 2}


# ---------- послуги типу номера ----------

def test_included_service_has_no_discount(db_session, room_type, service):
    link = room_registry.assign_service(db_session, room_type.id, service.id, included=True, discount_percentage=30)

    assert link.included is True
    assert link.discount_percentage == Decimal("0")


def test_discount_must_be_a_percentage(db_session, room_type, service):
    with pytest.raises(ValidationError):
        room_registry.assign_service(db_session, room_type.id, service.id, discount_percentage=150)


def test_service_is_assigned_once(db_session, room_type, service):
    room_registry.assign_service(db_session, room_type.id, service.id, discount_percentage=10)

    with pytest.raises(ConflictError):
        room_registry.assign_service(db_session, room_type.id, service.id)


def test_update_and_remove_room_type_service(db_session, room_type, service):
    room_registry.assign_service(db_session, room_type.id, service.id, discount_percentage=10)

    link = room_registry.update_room_type_service(db_session, room_type.id, service.id, False, 25)
    assert link.discount_percentage == Decimal("25")

    room_registry.remove_room_type_service(db_session, room_type.id, service.id)
    assert room_registry.list_room_type_services(db_session, room_type.id) == []


# ---------- каталог ----------

def test_amenity_in_use_cannot_be_deleted(db_session, amenity):
    room_registry.create_room_type(db_session, "Suite", Decimal("6000"), 4, amenity_ids=[amenity.id])

    with pytest.raises(StateError) as exc_info:
        catalog_service.delete_amenity(db_session, amenity.id)

    assert exc_info.value.extra == {"room_type_count": 1}


def test_service_used_by_recommendation_cannot_be_deleted(db_session, directory, room_type, service):
    catalog_service.create_recommendation(db_session, directory, GUEST_A.user_id, room_type.id, service.id, "Loves breakfast")

    with pytest.raises(StateError) as exc_info:
        catalog_service.delete_service(db_session, service.id)

    assert exc_info.value.extra == {"recommendation_count": 1, "room_type_count": 0}


def test_recommendation_for_unknown_guest(db_session, directory, room_type, service):
    with pytest.raises(NotFoundError):
        catalog_service.create_recommendation(db_session, directory, 999, room_type.id, service.id)


def test_service_price_cannot_be_negative(db_session):
    with pytest.raises(ValidationError):
        catalog_service.create_service(db_session, "Spa", Decimal("-1"))


def test_service_price_is_kept_in_cents(db_session):
    free = catalog_service.create_service(db_session, "Parking", Decimal("0"))
    assert free.price == Decimal("0")

    with pytest.raises(ValidationError):
        catalog_service.create_service(db_session, "Spa", Decimal("9.999"))
