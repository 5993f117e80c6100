from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
from decimal import Decimal
from ..models.Service import Service, RoomTypeService
from ..models.Recommendation import Recommendation


def add_service(db: Session, name: str, price: Decimal, description: Optional[str]) -> Service:
    service = Service(name=name, price=price, description=description)
    db.add(service)
    db.flush()
    return service


def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
    return db.query(Service).filter(Service.id == service_id).first()


def get_all_services(db: Session) -> List[Service]:
    return db.query(Service).order_by(Service.name).all()


def update_service(db: Session, service: Service, update_data: Dict[str, Any]) -> Service:
    for key, value in update_data.items():
        if hasattr(service, key):
            setattr(service, key, value)
    db.flush()
    return service


def delete_service(db: Session, service: Service) -> None:
    db.delete(service)
    db.flush()


def count_recommendations_for_service(db: Session, service_id: int) -> int:
    return db.query(Recommendation).filter(Recommendation.service_id == service_id).count()


def count_room_types_for_service(db: Session, service_id: int) -> int:
    return db.query(RoomTypeService).filter(RoomTypeService.service_id == service_id).count()
