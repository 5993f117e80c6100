from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_, desc
from typing import List, Optional
from datetime import date
from decimal import Decimal
from ..models.Booking import Booking, BookingStatus, ACTIVE_BOOKING_STATUSES
from ..models.Room import Room


def lock_room(db: Session, room_id: int) -> Optional[Room]:
    """
    Блокує рядок номера до кінця транзакції (SELECT ... FOR UPDATE).
    Це точка серіалізації для перевірки перетину дат і вставки бронювання.
    На SQLite запит без FOR UPDATE, там записи серіалізує BEGIN IMMEDIATE.
    """
    return db.query(Room).filter(Room.id == room_id).with_for_update().first()


def find_conflicting_bookings(
    db: Session,
    room_id: int,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[int] = None
) -> List[Booking]:
    """
    Активні бронювання номера, чий інтервал [check_in, check_out) перетинається
    з запитаним. Суміжні інтервали (виїзд == заїзд) не конфліктують.
    """
    query = db.query(Booking).filter(
        and_(
            Booking.room_id == room_id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            Booking.check_in < check_out,
            Booking.check_out > check_in
        )
    )
    if exclude_booking_id is not None:
        query = query.filter(Booking.id != exclude_booking_id)
    return query.order_by(Booking.check_in).all()


def get_current_confirmed_booking(db: Session, room_id: int, today: date) -> Optional[Booking]:
    """Підтверджене бронювання, яке зараз тримає номер (check_in <= today < check_out)."""
    return db.query(Booking).filter(
        Booking.room_id == room_id,
        Booking.status == BookingStatus.CONFIRMED,
        Booking.check_in <= today,
        Booking.check_out > today
    ).order_by(Booking.check_in).first()


def add_booking(
    db: Session,
    room: Room,
    guest_id: int,
    check_in: date,
    check_out: date,
    total_price: Decimal,
    status: BookingStatus
) -> Booking:
    new_booking = Booking(
        room=room,
        guest_id=guest_id,
        check_in=check_in,
        check_out=check_out,
        total_price=total_price,
        status=status
    )
    db.add(new_booking)
    db.flush()
    return new_booking


def get_booking_by_id(db: Session, booking_id: int, for_update: bool = False) -> Optional[Booking]:
    query = db.query(Booking).filter(Booking.id == booking_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def get_booking_with_details(db: Session, booking_id: int) -> Optional[Booking]:
    # одразу підтягуємо номер, його тип і платежі
    return db.query(Booking)\
        .options(
            joinedload(Booking.room).joinedload(Room.room_type),
            joinedload(Booking.payments)
        )\
        .filter(Booking.id == booking_id)\
        .first()


def get_all_bookings_with_filters(
    db: Session,
    guest_id: Optional[int] = None,
    room_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None
) -> List[Booking]:
    query = db.query(Booking).options(
        joinedload(Booking.room).joinedload(Room.room_type),
        joinedload(Booking.payments)
    )
    if guest_id is not None:
        query = query.filter(Booking.guest_id == guest_id)
    if room_id is not None:
        query = query.filter(Booking.room_id == room_id)
    if status:
        query = query.filter(Booking.status == status)
    if from_date:
        query = query.filter(Booking.check_in >= from_date)
    if to_date:
        query = query.filter(Booking.check_out <= to_date)
    # нові зверху
    return query.order_by(desc(Booking.created_at), desc(Booking.id)).all()


def count_bookings_for_room(db: Session, room_id: int) -> int:
    return db.query(Booking).filter(Booking.room_id == room_id).count()
