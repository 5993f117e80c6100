from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.Booking import Booking
from ..repositories import booking_repository, room_repository
from .exceptions import NotFoundError, ValidationError


@dataclass
class AvailabilityResult:
    available: bool
    conflicts: List[Booking] = field(default_factory=list)


def validate_date_range(check_in: date, check_out: date) -> None:
    if check_out <= check_in:
        raise ValidationError("check_out must be later than check_in")


def is_available(
    db: Session,
    room_id: int,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[int] = None,
) -> AvailabilityResult:
    """
    Чи вільний номер на [check_in, check_out).

    Конфліктують лише бронювання в статусах Pending/Confirmed, чий інтервал
    перетинається з запитаним. Операційний статус номера (Maintenance тощо)
    тут не враховується. Нічого не змінює в базі.
    """
    validate_date_range(check_in, check_out)
    if room_repository.get_room_by_id(db, room_id) is None:
        raise NotFoundError(f"Room {room_id} not found")

    conflicts = booking_repository.find_conflicting_bookings(
        db, room_id, check_in, check_out, exclude_booking_id=exclude_booking_id
    )
    return AvailabilityResult(available=not conflicts, conflicts=conflicts)
