import enum

from sqlalchemy import CheckConstraint, Column, Enum as SQLEnum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from common.db.database import Base
from ..models.assosiations import room_type_amenity_association


class RoomStatus(str, enum.Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    CLEANING = "Cleaning"


class RoomType(Base):
    __tablename__ = "room_types"
    __table_args__ = (
        CheckConstraint("price > 0", name="room_type_price_positive"),
        CheckConstraint("capacity > 0", name="room_type_capacity_positive"),
    )
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    capacity = Column(Integer, nullable=False)
    description = Column(String(400), nullable=True)

    # без cascade: тип номера не можна видалити, поки на нього посилаються кімнати
    rooms = relationship("Room", back_populates="room_type")

    amenities = relationship(
        "Amenity",
        secondary=room_type_amenity_association,
        back_populates="room_types",
        order_by="Amenity.name",
    )

    services = relationship("RoomTypeService", back_populates="room_type")


class Room(Base):
    __tablename__ = "rooms"
    id = Column(Integer, primary_key=True, index=True)

    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)

    room_number = Column(String(20), nullable=False, unique=True)
    status = Column(
        SQLEnum(RoomStatus, values_callable=lambda e: [member.value for member in e], native_enum=False, length=20),
        nullable=False,
        default=RoomStatus.AVAILABLE,
    )

    room_type = relationship("RoomType", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")
