import logging
from datetime import date
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from ..models.Booking import Booking, BookingStatus
from ..models.Room import RoomStatus
from ..repositories import booking_repository
from . import admin_log, availability_service
from .actor import Actor
from .exceptions import AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
from .guest_directory import GuestDirectory
from .money import to_money
from .transaction import run_in_transaction

logger = logging.getLogger(__name__)


# Єдина таблиця дозволених переходів. Термінальні статуси не мають виходів.
BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.NO_SHOW}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in BOOKING_TRANSITIONS.items() if not targets)

CREATABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def assert_transition_allowed(current: BookingStatus, new_status: BookingStatus) -> None:
    if current in TERMINAL_STATUSES:
        raise StateError(
            f"Booking is already {current.value}; its status can no longer be changed"
        )
    if new_status not in BOOKING_TRANSITIONS[current]:
        raise StateError(f"Cannot change booking status from {current.value} to {new_status.value}")


def _conflict_summary(booking: Booking) -> dict:
    return {
        "id": booking.id,
        "guest_id": booking.guest_id,
        "check_in": booking.check_in,
        "check_out": booking.check_out,
        "status": booking.status.value,
    }


def apply_room_side_effect(db: Session, booking: Booking, new_status: BookingStatus, today: date) -> None:
    """
    Єдине місце, де бронювання змінює статус номера.

    ->Confirmed: Occupied, якщо заїзд сьогодні, інакше без змін.
    ->Cancelled / ->No-Show: Available, якщо номер не тримає інше
    підтверджене бронювання, яке діє сьогодні.
    ->Completed: Cleaning.
    """
    room = booking.room
    old_room_status = room.status

    if new_status == BookingStatus.CONFIRMED:
        if booking.check_in == today:
            room.status = RoomStatus.OCCUPIED
    elif new_status in (BookingStatus.CANCELLED, BookingStatus.NO_SHOW):
        holder = booking_repository.get_current_confirmed_booking(db, room.id, today)
        if holder is None or holder.id == booking.id:
            room.status = RoomStatus.AVAILABLE
    elif new_status == BookingStatus.COMPLETED:
        room.status = RoomStatus.CLEANING

    if room.status != old_room_status:
        logger.info(
            "Room %s: %s -> %s (booking #%s is %s)",
            room.room_number, old_room_status.value, room.status.value, booking.id, new_status.value,
        )


def _authorize_transition(booking: Booking, new_status: BookingStatus, actor: Actor) -> None:
    if new_status == BookingStatus.CANCELLED:
        if not (actor.is_privileged or actor.owns(booking.guest_id)):
            raise AuthorizationError("Only the booking owner or an administrator can cancel this booking")
    elif not actor.is_privileged:
        raise AuthorizationError(f"Only an administrator can set booking status to {new_status.value}")


def change_status(db: Session, booking: Booking, new_status: BookingStatus, actor: Actor, today: date) -> Booking:
    """
    Переводить вже заблоковане бронювання в new_status разом із побічним
    ефектом на номер. Не комітить: викликається всередині транзакції.
    """
    _authorize_transition(booking, new_status, actor)
    assert_transition_allowed(booking.status, new_status)

    old_status = booking.status
    booking.status = new_status
    apply_room_side_effect(db, booking, new_status, today)
    db.flush()

    logger.info(
        "Booking #%s: %s -> %s by %s %s",
        booking.id, old_status.value, new_status.value, actor.role, actor.user_id,
    )
    return booking


def create_booking(
    db: Session,
    actor: Actor,
    directory: GuestDirectory,
    room_id: int,
    check_in: date,
    check_out: date,
    guest_id: Optional[int] = None,
    total_price: Optional[Decimal] = None,
    status: BookingStatus = BookingStatus.PENDING,
    today: Optional[date] = None,
) -> Booking:
    today = today or date.today()
    if guest_id is None:
        guest_id = actor.user_id

    if guest_id is None:
        raise ValidationError("guest_id is required")
    if check_in < today:
        raise ValidationError("check_in cannot be in the past")
    availability_service.validate_date_range(check_in, check_out)
    if status not in CREATABLE_STATUSES:
        raise ValidationError("A booking can only be created as Pending or Confirmed")
    if total_price is not None:
        total_price = to_money(total_price, "total_price")

    if not actor.is_admin:
        if not actor.owns(guest_id):
            raise AuthorizationError("You can only create bookings for yourself")
        if status == BookingStatus.CONFIRMED:
            raise AuthorizationError("Only an administrator can create a confirmed booking")

    if not directory.guest_exists(guest_id):
        raise NotFoundError(f"Guest {guest_id} not found")

    def operation() -> Booking:
        # блокування номера, перевірка перетину і вставка - одна транзакція
        room = booking_repository.lock_room(db, room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")
        if room.status != RoomStatus.AVAILABLE:
            raise ConflictError(f"Room {room.room_number} is not available (status: {room.status.value})")

        result = availability_service.is_available(db, room_id, check_in, check_out)
        if not result.available:
            raise ConflictError(
                f"Room {room.room_number} is already booked for the selected dates",
                extra={"conflicts": [_conflict_summary(b) for b in result.conflicts]},
            )

        price = total_price
        if price is None:
            nights = (check_out - check_in).days
            price = room.room_type.price * nights

        booking = booking_repository.add_booking(
            db,
            room=room,
            guest_id=guest_id,
            check_in=check_in,
            check_out=check_out,
            total_price=price,
            status=status,
        )
        if status == BookingStatus.CONFIRMED:
            apply_room_side_effect(db, booking, status, today)
        return booking

    booking = run_in_transaction(db, operation)
    logger.info(
        "Booking #%s created for guest %s, room %s, %s..%s (%s)",
        booking.id, guest_id, room_id, check_in, check_out, booking.status.value,
    )
    return booking


def transition_status(
    db: Session,
    booking_id: int,
    new_status: BookingStatus,
    actor: Actor,
    today: Optional[date] = None,
) -> Booking:
    today = today or date.today()

    def operation() -> Booking:
        booking = booking_repository.get_booking_by_id(db, booking_id, for_update=True)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return change_status(db, booking, new_status, actor, today)

    return run_in_transaction(db, operation)


def cancel_booking(
    db: Session,
    booking_id: int,
    actor: Actor,
    reason: Optional[str] = None,
    today: Optional[date] = None,
) -> Booking:
    booking = transition_status(db, booking_id, BookingStatus.CANCELLED, actor, today=today)

    if actor.is_admin:
        detail = f"Cancelled booking #{booking_id}"
        if reason:
            detail += f": {reason}"
        admin_log.log_admin_action(db, actor.user_id, "cancel_booking", detail)
    return booking


def list_bookings(
    db: Session,
    actor: Actor,
    guest_id: Optional[int] = None,
    room_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> List[Booking]:
    if not actor.is_admin:
        if guest_id is not None and not actor.owns(guest_id):
            raise AuthorizationError("You can only view your own bookings")
        guest_id = actor.user_id

    return booking_repository.get_all_bookings_with_filters(
        db,
        guest_id=guest_id,
        room_id=room_id,
        status=status,
        from_date=from_date,
        to_date=to_date,
    )


def get_booking(db: Session, booking_id: int, actor: Actor) -> Booking:
    booking = booking_repository.get_booking_with_details(db, booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    if not (actor.is_admin or actor.owns(booking.guest_id)):
        raise AuthorizationError("You can only view your own bookings")
    return booking
