from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from common.db.database import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("price >= 0", name="service_price_not_negative"),
    )
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(400), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)

    room_types = relationship("RoomTypeService", back_populates="service")


class RoomTypeService(Base):
    """Послуга, прив'язана до типу номера: включена в ціну або зі знижкою."""

    __tablename__ = "room_type_services"
    __table_args__ = (
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="room_type_service_discount_range",
        ),
    )
    room_type_id = Column(Integer, ForeignKey("room_types.id"), primary_key=True)
    service_id = Column(Integer, ForeignKey("services.id"), primary_key=True)
    included = Column(Boolean, nullable=False, default=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    room_type = relationship("RoomType", back_populates="services")
    service = relationship("Service", back_populates="room_types")
