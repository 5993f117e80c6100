from sqlalchemy import Column, Integer, Table, ForeignKey
from common.db.database import Base

# Таблиця зв'язку Many-to-Many між RoomType та Amenity
room_type_amenity_association = Table(
    'room_type_amenities',
    Base.metadata,
    Column('room_type_id', Integer, ForeignKey('room_types.id'), primary_key=True),
    Column("amenity_id", Integer, ForeignKey("amenities.id"), primary_key=True)
)
