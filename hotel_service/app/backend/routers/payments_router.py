from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.payment import (
    BookingPaymentsOut,
    CreatePaymentPayload,
    PaymentOut,
    PaymentRecordedOut,
    PaymentWithBalanceOut,
)
from ..dependencies import get_current_actor
from ..services import payment_service
from ..services.actor import Actor

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=PaymentRecordedOut, status_code=status.HTTP_201_CREATED)
def record_payment(
    payload: CreatePaymentPayload,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    payment, summary = payment_service.record_payment(
        db, payload.booking_id, payload.amount, payload.method, actor=actor
    )
    return PaymentRecordedOut(payment=PaymentOut.model_validate(payment), payment_summary=summary)


@router.get("/booking/{booking_id}", response_model=BookingPaymentsOut)
def get_payments_for_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    entries, summary = payment_service.get_payments_for_booking(db, booking_id, actor=actor)
    payments = [
        PaymentWithBalanceOut(**PaymentOut.model_validate(payment).model_dump(), balance_after=balance_after)
        for payment, balance_after in entries
    ]
    return BookingPaymentsOut(booking_id=booking_id, payments=payments, payment_summary=summary)
