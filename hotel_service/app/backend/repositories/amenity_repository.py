from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
from ..models.Amenity import Amenity
from ..models.assosiations import room_type_amenity_association


def add_amenity(db: Session, name: str, description: Optional[str]) -> Amenity:
    amenity = Amenity(name=name, description=description)
    db.add(amenity)
    db.flush()
    return amenity


def get_amenity_by_id(db: Session, amenity_id: int) -> Optional[Amenity]:
    return db.query(Amenity).filter(Amenity.id == amenity_id).first()


def get_amenities_by_ids(db: Session, amenity_ids: List[int]) -> List[Amenity]:
    if not amenity_ids:
        return []
    return db.query(Amenity).filter(Amenity.id.in_(amenity_ids)).all()


def get_all_amenities(db: Session) -> List[Amenity]:
    return db.query(Amenity).order_by(Amenity.name).all()


def update_amenity(db: Session, amenity: Amenity, update_data: Dict[str, Any]) -> Amenity:
    for key, value in update_data.items():
        if hasattr(amenity, key):
            setattr(amenity, key, value)
    db.flush()
    return amenity


def delete_amenity(db: Session, amenity: Amenity) -> None:
    db.delete(amenity)
    db.flush()


def count_room_types_using_amenity(db: Session, amenity_id: int) -> int:
    return db.query(room_type_amenity_association)\
        .filter(room_type_amenity_association.c.amenity_id == amenity_id).count()
