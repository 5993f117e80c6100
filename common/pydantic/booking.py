from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from hotel_service.app.backend.models.Booking import BookingStatus
from .payment import PaymentOut, PaymentSummary
from .types import Money


class CreateBookingPayload(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    # якщо не вказано, бронюємо на поточного користувача
    guest_id: Optional[int] = None
    # якщо не вказано, ціна = ціна типу номера * кількість ночей
    total_price: Optional[Decimal] = None
    status: BookingStatus = BookingStatus.PENDING


class UpdateBookingStatusPayload(BaseModel):
    status: BookingStatus


class CancelBookingPayload(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=400)


class BookingOut(BaseModel):
    id: int
    guest_id: int
    room_id: int
    room_number: Optional[str] = None
    room_type_name: Optional[str] = None
    check_in: date
    check_out: date
    status: BookingStatus
    total_price: Money
    created_at: Optional[datetime] = None


class BookingListItemOut(BookingOut):
    payment_summary: PaymentSummary


class BookingDetailOut(BookingOut):
    room_status: Optional[str] = None
    payments: List[PaymentOut] = []
    payment_summary: PaymentSummary


class BookingStatusChangedOut(BaseModel):
    booking: BookingOut
    room_status: str
    reason: Optional[str] = None
    message: str
