import enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum as SQLEnum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from common.db.database import Base


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
    NO_SHOW = "No-Show"


# Бронювання з цими статусами займають дати номера
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="check_out_after_check_in"),
        CheckConstraint("total_price > 0", name="booking_total_price_positive"),
    )
    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)

    # гості живуть у User Service, тому без ForeignKey
    guest_id = Column(Integer, nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    status = Column(
        SQLEnum(BookingStatus, values_callable=lambda e: [member.value for member in e], native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    total_price = Column(Numeric(10, 2), nullable=False)

    room = relationship("Room", back_populates="bookings")
    payments = relationship(
        "Payment",
        back_populates="booking",
        order_by="Payment.id",
    )
