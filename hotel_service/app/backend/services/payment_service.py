import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from common.pydantic.payment import PaymentSummary
from ..models.Booking import Booking, BookingStatus
from ..models.Payment import Payment
from ..repositories import booking_repository, payment_repository
from . import booking_service
from .actor import SYSTEM_ACTOR, Actor
from .exceptions import AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
from .money import to_money
from .transaction import run_in_transaction

logger = logging.getLogger(__name__)

# на скасовані та неявки гроші не приймаємо
NON_PAYABLE_STATUSES = (BookingStatus.CANCELLED, BookingStatus.NO_SHOW)


def build_payment_summary(total_price: Decimal, total_paid: Decimal) -> PaymentSummary:
    return PaymentSummary(
        total_price=total_price,
        total_paid=total_paid,
        balance=total_price - total_paid,
        fully_paid=total_paid >= total_price,
    )


def summarize_booking(booking: Booking) -> PaymentSummary:
    total_paid = sum((payment.amount for payment in booking.payments), Decimal("0"))
    return build_payment_summary(booking.total_price, total_paid)


def _authorize(booking: Booking, actor: Optional[Actor]) -> None:
    if actor is not None and not (actor.is_privileged or actor.owns(booking.guest_id)):
        raise AuthorizationError("Only the booking owner or an administrator can access its payments")


def record_payment(
    db: Session,
    booking_id: int,
    amount,
    method: str,
    actor: Optional[Actor] = None,
    today: Optional[date] = None,
) -> Tuple[Payment, PaymentSummary]:
    """
    Записує платіж за бронювання.

    Сума платежів ніколи не перевищує total_price: переплата відхиляється
    цілком. Коли бронювання в статусі Pending стає повністю оплаченим, воно
    переходить у Confirmed через той самий перехід, що й ручне підтвердження.
    Все в одній транзакції з заблокованим рядком бронювання.
    """
    today = today or date.today()
    value = to_money(amount, "Payment amount")
    method = (method or "").strip()
    if not method:
        raise ValidationError("Payment method is required")

    def operation() -> Tuple[Payment, PaymentSummary]:
        booking = booking_repository.get_booking_by_id(db, booking_id, for_update=True)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        _authorize(booking, actor)
        if booking.status in NON_PAYABLE_STATUSES:
            raise StateError(f"Cannot record a payment for a {booking.status.value} booking")

        payments = payment_repository.get_payments_for_booking(db, booking.id)
        total_paid = sum((payment.amount for payment in payments), Decimal("0"))
        remaining = booking.total_price - total_paid
        if value > remaining:
            raise ConflictError(
                f"Payment amount ({value}) exceeds remaining balance ({remaining})",
                extra={"remaining_balance": remaining},
            )

        payment = payment_repository.add_payment(db, booking.id, value, method)
        new_total_paid = total_paid + value
        if new_total_paid >= booking.total_price and booking.status == BookingStatus.PENDING:
            booking_service.change_status(db, booking, BookingStatus.CONFIRMED, SYSTEM_ACTOR, today)

        return payment, build_payment_summary(booking.total_price, new_total_paid)

    payment, summary = run_in_transaction(db, operation)
    logger.info(
        "Payment #%s of %s (%s) recorded for booking #%s, balance %s",
        payment.id, value, method, booking_id, summary.balance,
    )
    return payment, summary


def get_payments_for_booking(
    db: Session,
    booking_id: int,
    actor: Optional[Actor] = None,
) -> Tuple[List[Tuple[Payment, Decimal]], PaymentSummary]:
    """
    Повертає ([(платіж, залишок після нього)], підсумок), нові платежі зверху.
    Лише читає.
    """
    booking = booking_repository.get_booking_by_id(db, booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    _authorize(booking, actor)

    payments = payment_repository.get_payments_for_booking(db, booking.id)
    entries = []
    total_paid = Decimal("0")
    for payment in payments:
        total_paid += payment.amount
        entries.append((payment, booking.total_price - total_paid))
    entries.reverse()

    return entries, build_payment_summary(booking.total_price, total_paid)
