from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.booking import (
    BookingDetailOut,
    BookingListItemOut,
    BookingOut,
    BookingStatusChangedOut,
    CancelBookingPayload,
    CreateBookingPayload,
    UpdateBookingStatusPayload,
)
from ..dependencies import get_current_actor, get_guest_directory
from ..models.Booking import BookingStatus
from ..services import booking_service, payment_service
from ..services.actor import Actor
from ..services.guest_directory import GuestDirectory
from .serializers import booking_to_detail, booking_to_list_item, booking_to_out

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: CreateBookingPayload,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    directory: GuestDirectory = Depends(get_guest_directory),
):
    booking = booking_service.create_booking(
        db,
        actor,
        directory,
        room_id=payload.room_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guest_id=payload.guest_id,
        total_price=payload.total_price,
        status=payload.status,
    )
    return booking_to_out(booking)


@router.get("", response_model=List[BookingListItemOut])
def list_bookings(
    guest_id: Optional[int] = Query(None),
    room_id: Optional[int] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    bookings = booking_service.list_bookings(
        db,
        actor,
        guest_id=guest_id,
        room_id=room_id,
        status=status_filter,
        from_date=from_date,
        to_date=to_date,
    )
    return [booking_to_list_item(b, payment_service.summarize_booking(b)) for b in bookings]


@router.get("/{booking_id}", response_model=BookingDetailOut)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    booking = booking_service.get_booking(db, booking_id, actor)
    return booking_to_detail(booking, payment_service.summarize_booking(booking))


@router.patch("/{booking_id}/status", response_model=BookingStatusChangedOut)
def update_booking_status(
    booking_id: int,
    payload: UpdateBookingStatusPayload,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    booking = booking_service.transition_status(db, booking_id, payload.status, actor)
    return BookingStatusChangedOut(
        booking=booking_to_out(booking),
        room_status=booking.room.status.value,
        message=f"Booking status updated to {booking.status.value}",
    )


@router.post("/{booking_id}/cancel", response_model=BookingStatusChangedOut)
def cancel_booking(
    booking_id: int,
    payload: Optional[CancelBookingPayload] = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    reason = payload.reason if payload else None
    booking = booking_service.cancel_booking(db, booking_id, actor, reason=reason)
    return BookingStatusChangedOut(
        booking=booking_to_out(booking),
        room_status=booking.room.status.value,
        reason=reason,
        message="Booking cancelled successfully",
    )
