from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from typing import List, Optional, Dict, Any
from ..models.Room import Room, RoomStatus, RoomType
from ..models.Amenity import Amenity
from ..models.Service import RoomTypeService
from ..models.assosiations import room_type_amenity_association


def add_room(db: Session, room_number: str, room_type_id: int, status: RoomStatus) -> Room:
    new_room = Room(room_number=room_number, room_type_id=room_type_id, status=status)
    db.add(new_room)
    db.flush()
    return new_room


def get_room_by_id(db: Session, room_id: int, for_update: bool = False) -> Optional[Room]:
    query = db.query(Room).filter(Room.id == room_id)
    if for_update:
        # FOR UPDATE не можна поєднати з LEFT OUTER JOIN від joinedload
        return query.with_for_update().first()
    return query.options(joinedload(Room.room_type)).first()


def get_room_by_number(db: Session, room_number: str) -> Optional[Room]:
    return db.query(Room).filter(Room.room_number == room_number).first()


def get_filtered_rooms(
    db: Session,
    status: Optional[RoomStatus] = None,
    room_type_id: Optional[int] = None
) -> List[Room]:
    query = db.query(Room).options(joinedload(Room.room_type))
    if status:
        query = query.filter(Room.status == status)
    if room_type_id is not None:
        query = query.filter(Room.room_type_id == room_type_id)
    return query.order_by(Room.room_number).all()


def update_room(db: Session, room: Room, update_data: Dict[str, Any]) -> Room:
    for key, value in update_data.items():
        if hasattr(room, key):
            setattr(room, key, value)
    db.flush()
    return room


def delete_room(db: Session, room: Room) -> None:
    db.delete(room)
    db.flush()


def add_room_type(
    db: Session,
    name: str,
    price,
    capacity: int,
    description: Optional[str],
    amenities: List[Amenity]
) -> RoomType:
    new_room_type = RoomType(
        name=name,
        price=price,
        capacity=capacity,
        description=description,
        amenities=amenities
    )
    db.add(new_room_type)
    db.flush()
    return new_room_type


def get_room_type_by_id(db: Session, room_type_id: int) -> Optional[RoomType]:
    return db.query(RoomType).options(joinedload(RoomType.amenities))\
        .filter(RoomType.id == room_type_id).first()


def get_all_room_types(db: Session) -> List[RoomType]:
    return db.query(RoomType).options(joinedload(RoomType.amenities))\
        .order_by(RoomType.name).all()


def get_room_counts_by_type(db: Session) -> Dict[int, int]:
    """{room_type_id: кількість номерів} одним запитом."""
    rows = db.query(Room.room_type_id, func.count(Room.id)).group_by(Room.room_type_id).all()
    return {room_type_id: count for room_type_id, count in rows}


def update_room_type(db: Session, room_type: RoomType, update_data: Dict[str, Any]) -> RoomType:
    for key, value in update_data.items():
        if hasattr(room_type, key):
            setattr(room_type, key, value)
    db.flush()
    return room_type


def delete_room_type(db: Session, room_type: RoomType) -> None:
    db.delete(room_type)
    db.flush()


def count_rooms_for_type(db: Session, room_type_id: int) -> int:
    return db.query(Room).filter(Room.room_type_id == room_type_id).count()


def count_amenities_for_type(db: Session, room_type_id: int) -> int:
    return db.query(room_type_amenity_association)\
        .filter(room_type_amenity_association.c.room_type_id == room_type_id).count()


def count_services_for_type(db: Session, room_type_id: int) -> int:
    return db.query(RoomTypeService).filter(RoomTypeService.room_type_id == room_type_id).count()


def get_room_type_services(db: Session, room_type_id: int) -> List[RoomTypeService]:
    return db.query(RoomTypeService)\
        .options(joinedload(RoomTypeService.service))\
        .filter(RoomTypeService.room_type_id == room_type_id)\
        .order_by(RoomTypeService.service_id)\
        .all()


def get_room_type_service(db: Session, room_type_id: int, service_id: int) -> Optional[RoomTypeService]:
    return db.query(RoomTypeService).filter(
        RoomTypeService.room_type_id == room_type_id,
        RoomTypeService.service_id == service_id
    ).first()


def add_room_type_service(
    db: Session,
    room_type_id: int,
    service_id: int,
    included: bool,
    discount_percentage
) -> RoomTypeService:
    link = RoomTypeService(
        room_type_id=room_type_id,
        service_id=service_id,
        included=included,
        discount_percentage=discount_percentage
    )
    db.add(link)
    db.flush()
    return link


def delete_room_type_service(db: Session, link: RoomTypeService) -> None:
    db.delete(link)
    db.flush()
