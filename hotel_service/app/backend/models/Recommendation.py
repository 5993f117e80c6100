from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from common.db.database import Base


class Recommendation(Base):
    __tablename__ = "recommendations"
    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, nullable=False, index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    reason = Column(String(400), nullable=True)

    room_type = relationship("RoomType")
    service = relationship("Service")
