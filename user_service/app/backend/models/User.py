from sqlalchemy import Column, Integer, String
from common.db.database import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    login = Column(String(32), unique=True, nullable=False)
    fullname = Column(String(150), nullable=True)
    role = Column(String(20), nullable=False, default="user")
    email = Column(String(254), unique=True, nullable=True)
    phone_number = Column(String(50), unique=True, nullable=True)
