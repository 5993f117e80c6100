from sqlalchemy.orm import Session
from typing import List
from decimal import Decimal
from ..models.Payment import Payment


def add_payment(db: Session, booking_id: int, amount: Decimal, method: str) -> Payment:
    new_payment = Payment(booking_id=booking_id, amount=amount, method=method)
    db.add(new_payment)
    db.flush()
    return new_payment


def get_payments_for_booking(db: Session, booking_id: int) -> List[Payment]:
    """Платежі в хронологічному порядку (старі спочатку)."""
    return db.query(Payment)\
        .filter(Payment.booking_id == booking_id)\
        .order_by(Payment.payment_date, Payment.id)\
        .all()
