import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..models.Room import Room, RoomStatus, RoomType
from ..models.Service import RoomTypeService
from ..repositories import amenity_repository, booking_repository, room_repository, service_repository
from . import admin_log
from .actor import Actor
from .exceptions import AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
from .money import to_money
from .transaction import run_in_transaction

logger = logging.getLogger(__name__)


# ---------- номери ----------

def _get_room_or_404(db: Session, room_id: int, for_update: bool = False) -> Room:
    room = room_repository.get_room_by_id(db, room_id, for_update=for_update)
    if room is None:
        raise NotFoundError(f"Room {room_id} not found")
    return room


def _ensure_room_type(db: Session, room_type_id: int) -> RoomType:
    room_type = room_repository.get_room_type_by_id(db, room_type_id)
    if room_type is None:
        raise NotFoundError(f"Room type {room_type_id} not found")
    return room_type


def _ensure_unique_number(db: Session, room_number: str, room_id: Optional[int] = None) -> None:
    existing = room_repository.get_room_by_number(db, room_number)
    if existing is not None and existing.id != room_id:
        raise ConflictError(f"Room number {room_number} already exists")


def create_room(
    db: Session,
    room_number: str,
    room_type_id: int,
    status: RoomStatus = RoomStatus.AVAILABLE,
) -> Room:
    room_number = room_number.strip()
    if not room_number:
        raise ValidationError("room_number is required")
    # новий номер не може бути зайнятим: бронювань у нього ще немає
    if status == RoomStatus.OCCUPIED:
        raise ValidationError("A new room cannot start as Occupied")

    def operation() -> Room:
        _ensure_room_type(db, room_type_id)
        _ensure_unique_number(db, room_number)
        return room_repository.add_room(db, room_number, room_type_id, status)

    room = run_in_transaction(db, operation)
    logger.info("Room %s created (type %s)", room.room_number, room_type_id)
    return room


def update_room(
    db: Session,
    room_id: int,
    room_number: Optional[str] = None,
    room_type_id: Optional[int] = None,
) -> Room:
    if room_number is None and room_type_id is None:
        raise ValidationError("Nothing to update: pass room_number or room_type_id")

    def operation() -> Room:
        room = _get_room_or_404(db, room_id, for_update=True)
        update_data = {}
        if room_number is not None:
            new_number = room_number.strip()
            if not new_number:
                raise ValidationError("room_number cannot be empty")
            _ensure_unique_number(db, new_number, room_id=room.id)
            update_data["room_number"] = new_number
        if room_type_id is not None:
            room_type = _ensure_room_type(db, room_type_id)
            update_data["room_type"] = room_type
        return room_repository.update_room(db, room, update_data)

    return run_in_transaction(db, operation)


def delete_room(db: Session, room_id: int) -> None:
    def operation() -> None:
        room = _get_room_or_404(db, room_id, for_update=True)
        booking_count = booking_repository.count_bookings_for_room(db, room.id)
        if booking_count:
            raise StateError(
                f"Cannot delete room {room.room_number}: it has {booking_count} booking(s)",
                extra={"booking_count": booking_count},
            )
        room_repository.delete_room(db, room)

    run_in_transaction(db, operation)
    logger.info("Room %s deleted", room_id)


def list_rooms(
    db: Session,
    status: Optional[RoomStatus] = None,
    room_type_id: Optional[int] = None,
) -> List[Room]:
    return room_repository.get_filtered_rooms(db, status=status, room_type_id=room_type_id)


def get_room(db: Session, room_id: int) -> Room:
    return _get_room_or_404(db, room_id)


def set_room_status(
    db: Session,
    room_id: int,
    new_status: RoomStatus,
    actor: Actor,
    force: bool = False,
    today: Optional[date] = None,
) -> Room:
    """
    Пряма зміна статусу номера адміністратором.

    Occupied можна поставити лише тоді, коли сьогодні діє підтверджене
    бронювання цього номера. Зняти Occupied з номера, який тримає таке
    бронювання, можна тільки з force=True: зміна застосовується, пишеться
    попередження в лог і запис override_room_status у журнал адміністратора.
    """
    if not actor.is_admin:
        raise AuthorizationError("Only an administrator can change room status")
    today = today or date.today()
    overridden = []

    def operation() -> Room:
        room = _get_room_or_404(db, room_id, for_update=True)
        holder = booking_repository.get_current_confirmed_booking(db, room.id, today)

        if new_status == RoomStatus.OCCUPIED and holder is None:
            raise StateError(
                f"Room {room.room_number} can only be Occupied while a confirmed booking covers today"
            )

        if room.status == RoomStatus.OCCUPIED and new_status != RoomStatus.OCCUPIED and holder is not None:
            if not force:
                raise StateError(
                    f"Room {room.room_number} is held by confirmed booking #{holder.id}; "
                    f"pass force=true to override",
                    extra={"booking_id": holder.id},
                )
            logger.warning(
                "Admin %s overrides room %s: Occupied -> %s while booking #%s is Confirmed",
                actor.user_id, room.room_number, new_status.value, holder.id,
            )
            overridden.append(holder.id)

        old_status = room.status
        room.status = new_status
        db.flush()
        logger.info("Room %s: %s -> %s by admin %s", room.room_number, old_status.value, new_status.value, actor.user_id)
        return room

    room = run_in_transaction(db, operation)

    if overridden:
        admin_log.log_admin_action(
            db,
            actor.user_id,
            "override_room_status",
            f"Room {room.room_number} set to {new_status.value} while booking #{overridden[0]} is Confirmed",
        )
    return room


# ---------- типи номерів ----------

def _validate_room_type_fields(name: str, price: Decimal, capacity: int):
    name = (name or "").strip()
    if not name:
        raise ValidationError("Room type name is required")
    price = to_money(price, "Room type price")
    if capacity is None or capacity <= 0:
        raise ValidationError("Room type capacity must be greater than zero")
    return name, price


def _load_amenities(db: Session, amenity_ids: List[int]):
    unique_ids = list(dict.fromkeys(amenity_ids))
    amenities = amenity_repository.get_amenities_by_ids(db, unique_ids)
    missing = sorted(set(unique_ids) - {amenity.id for amenity in amenities})
    if missing:
        raise NotFoundError(f"Amenities not found: {missing}", extra={"missing_amenity_ids": missing})
    return amenities


def create_room_type(
    db: Session,
    name: str,
    price: Decimal,
    capacity: int,
    description: Optional[str] = None,
    amenity_ids: Optional[List[int]] = None,
) -> RoomType:
    name, price = _validate_room_type_fields(name, price, capacity)

    def operation() -> RoomType:
        amenities = _load_amenities(db, amenity_ids or [])
        return room_repository.add_room_type(db, name, price, capacity, description, amenities)

    room_type = run_in_transaction(db, operation)
    logger.info("Room type %r created", room_type.name)
    return room_type


def update_room_type(
    db: Session,
    room_type_id: int,
    name: str,
    price: Decimal,
    capacity: int,
    description: Optional[str] = None,
    amenity_ids: Optional[List[int]] = None,
) -> RoomType:
    name, price = _validate_room_type_fields(name, price, capacity)

    def operation() -> RoomType:
        room_type = _ensure_room_type(db, room_type_id)
        update_data = {"name": name, "price": price, "capacity": capacity, "description": description}
        if amenity_ids is not None:
            update_data["amenities"] = _load_amenities(db, amenity_ids)
        return room_repository.update_room_type(db, room_type, update_data)

    return run_in_transaction(db, operation)


def delete_room_type(db: Session, room_type_id: int) -> None:
    def operation() -> None:
        room_type = _ensure_room_type(db, room_type_id)
        room_count = room_repository.count_rooms_for_type(db, room_type.id)
        if room_count:
            raise StateError(
                f"Cannot delete room type {room_type.name}: {room_count} room(s) still use it",
                extra={"room_count": room_count},
            )
        amenity_count = room_repository.count_amenities_for_type(db, room_type.id)
        service_count = room_repository.count_services_for_type(db, room_type.id)
        if amenity_count or service_count:
            raise StateError(
                f"Cannot delete room type {room_type.name}: remove its amenities and services first",
                extra={"amenity_count": amenity_count, "service_count": service_count},
            )
        room_repository.delete_room_type(db, room_type)

    run_in_transaction(db, operation)
    logger.info("Room type %s deleted", room_type_id)


def list_room_types(db: Session) -> List[RoomType]:
    return room_repository.get_all_room_types(db)


def room_counts_by_type(db: Session) -> Dict[int, int]:
    return room_repository.get_room_counts_by_type(db)


def get_room_type(db: Session, room_type_id: int) -> RoomType:
    return _ensure_room_type(db, room_type_id)


# ---------- послуги типу номера ----------

def _normalize_discount(included: bool, discount_percentage) -> Decimal:
    # включена послуга безкоштовна, знижка не має сенсу
    if included:
        return Decimal("0")
    discount = Decimal(str(discount_percentage if discount_percentage is not None else 0))
    if discount < 0 or discount > 100:
        raise ValidationError("discount_percentage must be between 0 and 100")
    return discount


def list_room_type_services(db: Session, room_type_id: int) -> List[RoomTypeService]:
    _ensure_room_type(db, room_type_id)
    return room_repository.get_room_type_services(db, room_type_id)


def assign_service(
    db: Session,
    room_type_id: int,
    service_id: int,
    included: bool = False,
    discount_percentage=0,
) -> RoomTypeService:
    discount = _normalize_discount(included, discount_percentage)

    def operation() -> RoomTypeService:
        _ensure_room_type(db, room_type_id)
        if service_repository.get_service_by_id(db, service_id) is None:
            raise NotFoundError(f"Service {service_id} not found")
        if room_repository.get_room_type_service(db, room_type_id, service_id) is not None:
            raise ConflictError(f"Service {service_id} is already assigned to room type {room_type_id}")
        return room_repository.add_room_type_service(db, room_type_id, service_id, included, discount)

    return run_in_transaction(db, operation)


def update_room_type_service(
    db: Session,
    room_type_id: int,
    service_id: int,
    included: bool = False,
    discount_percentage=0,
) -> RoomTypeService:
    discount = _normalize_discount(included, discount_percentage)

    def operation() -> RoomTypeService:
        link = room_repository.get_room_type_service(db, room_type_id, service_id)
        if link is None:
            raise NotFoundError(f"Service {service_id} is not assigned to room type {room_type_id}")
        link.included = included
        link.discount_percentage = discount
        db.flush()
        return link

    return run_in_transaction(db, operation)


def remove_room_type_service(db: Session, room_type_id: int, service_id: int) -> None:
    def operation() -> None:
        link = room_repository.get_room_type_service(db, room_type_id, service_id)
        if link is None:
            raise NotFoundError(f"Service {service_id} is not assigned to room type {room_type_id}")
        room_repository.delete_room_type_service(db, link)

    run_in_transaction(db, operation)
