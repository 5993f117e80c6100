from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from common.db.database import Base


class AdminAction(Base):
    __tablename__ = "admin_actions"
    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(Integer, nullable=False, index=True)
    action_type = Column(String(50), nullable=False, index=True)
    action_detail = Column(Text, nullable=True)
    action_timestamp = Column(DateTime, nullable=False, server_default=func.now(), index=True)
