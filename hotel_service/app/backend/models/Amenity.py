from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from common.db.database import Base
from ..models.assosiations import room_type_amenity_association


class Amenity(Base):
    __tablename__ = "amenities"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(400), nullable=True)

    room_types = relationship(
        "RoomType",
        secondary=room_type_amenity_association,
        back_populates="amenities",
    )
