from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .types import Money


class CreatePaymentPayload(BaseModel):
    booking_id: int
    # додатність суми перевіряє сам леджер, щоб відмова мала зрозумілу причину
    amount: Decimal
    method: str = Field(min_length=1, max_length=50)


class PaymentSummary(BaseModel):
    total_price: Money
    total_paid: Money
    balance: Money
    fully_paid: bool


class PaymentOut(BaseModel):
    id: int
    booking_id: int
    amount: Money
    method: str
    payment_date: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentWithBalanceOut(PaymentOut):
    balance_after: Money


class PaymentRecordedOut(BaseModel):
    payment: PaymentOut
    payment_summary: PaymentSummary
    message: str = "Payment recorded successfully"


class BookingPaymentsOut(BaseModel):
    booking_id: int
    payments: List[PaymentWithBalanceOut]
    payment_summary: PaymentSummary
