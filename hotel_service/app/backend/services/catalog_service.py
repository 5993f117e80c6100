import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.Amenity import Amenity
from ..models.Recommendation import Recommendation
from ..models.Service import Service
from ..repositories import amenity_repository, recommendation_repository, room_repository, service_repository
from .exceptions import NotFoundError, StateError, ValidationError
from .guest_directory import GuestDirectory
from .money import to_money
from .transaction import run_in_transaction

logger = logging.getLogger(__name__)


def _require_name(name: str, what: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError(f"{what} name is required")
    return name


# ---------- зручності ----------

def _get_amenity_or_404(db: Session, amenity_id: int) -> Amenity:
    amenity = amenity_repository.get_amenity_by_id(db, amenity_id)
    if amenity is None:
        raise NotFoundError(f"Amenity {amenity_id} not found")
    return amenity


def list_amenities(db: Session) -> List[Amenity]:
    return amenity_repository.get_all_amenities(db)


def get_amenity(db: Session, amenity_id: int) -> Amenity:
    return _get_amenity_or_404(db, amenity_id)


def create_amenity(db: Session, name: str, description: Optional[str] = None) -> Amenity:
    name = _require_name(name, "Amenity")
    return run_in_transaction(db, lambda: amenity_repository.add_amenity(db, name, description))


def update_amenity(db: Session, amenity_id: int, name: str, description: Optional[str] = None) -> Amenity:
    name = _require_name(name, "Amenity")

    def operation() -> Amenity:
        amenity = _get_amenity_or_404(db, amenity_id)
        return amenity_repository.update_amenity(db, amenity, {"name": name, "description": description})

    return run_in_transaction(db, operation)


def delete_amenity(db: Session, amenity_id: int) -> None:
    def operation() -> None:
        amenity = _get_amenity_or_404(db, amenity_id)
        room_type_count = amenity_repository.count_room_types_using_amenity(db, amenity.id)
        if room_type_count:
            raise StateError(
                f"Cannot delete amenity {amenity.name}: {room_type_count} room type(s) still use it",
                extra={"room_type_count": room_type_count},
            )
        amenity_repository.delete_amenity(db, amenity)

    run_in_transaction(db, operation)
    logger.info("Amenity %s deleted", amenity_id)


# ---------- послуги ----------

def _validate_service_price(price: Decimal) -> Decimal:
    return to_money(price, "Service price", allow_zero=True)


def _get_service_or_404(db: Session, service_id: int) -> Service:
    service = service_repository.get_service_by_id(db, service_id)
    if service is None:
        raise NotFoundError(f"Service {service_id} not found")
    return service


def list_services(db: Session) -> List[Service]:
    return service_repository.get_all_services(db)


def get_service(db: Session, service_id: int) -> Service:
    return _get_service_or_404(db, service_id)


def create_service(db: Session, name: str, price: Decimal, description: Optional[str] = None) -> Service:
    name = _require_name(name, "Service")
    price = _validate_service_price(price)
    return run_in_transaction(db, lambda: service_repository.add_service(db, name, price, description))


def update_service(
    db: Session,
    service_id: int,
    name: str,
    price: Decimal,
    description: Optional[str] = None,
) -> Service:
    name = _require_name(name, "Service")
    price = _validate_service_price(price)

    def operation() -> Service:
        service = _get_service_or_404(db, service_id)
        return service_repository.update_service(
            db, service, {"name": name, "price": price, "description": description}
        )

    return run_in_transaction(db, operation)


def delete_service(db: Session, service_id: int) -> None:
    def operation() -> None:
        service = _get_service_or_404(db, service_id)
        recommendation_count = service_repository.count_recommendations_for_service(db, service.id)
        room_type_count = service_repository.count_room_types_for_service(db, service.id)
        if recommendation_count or room_type_count:
            raise StateError(
                f"Cannot delete service {service.name}: it is still referenced",
                extra={"recommendation_count": recommendation_count, "room_type_count": room_type_count},
            )
        service_repository.delete_service(db, service)

    run_in_transaction(db, operation)
    logger.info("Service %s deleted", service_id)


# ---------- рекомендації ----------

def create_recommendation(
    db: Session,
    directory: GuestDirectory,
    guest_id: int,
    room_type_id: int,
    service_id: int,
    reason: Optional[str] = None,
) -> Recommendation:
    if not directory.guest_exists(guest_id):
        raise NotFoundError(f"Guest {guest_id} not found")

    def operation() -> Recommendation:
        if room_repository.get_room_type_by_id(db, room_type_id) is None:
            raise NotFoundError(f"Room type {room_type_id} not found")
        _get_service_or_404(db, service_id)
        return recommendation_repository.add_recommendation(db, guest_id, room_type_id, service_id, reason)

    recommendation = run_in_transaction(db, operation)
    logger.info("Recommendation #%s created for guest %s", recommendation.id, guest_id)
    return recommendation


def list_recommendations_for_guest(db: Session, guest_id: int) -> List[Recommendation]:
    return recommendation_repository.get_recommendations_for_guest(db, guest_id)


def delete_recommendation(db: Session, recommendation_id: int) -> None:
    def operation() -> None:
        recommendation = recommendation_repository.get_recommendation_by_id(db, recommendation_id)
        if recommendation is None:
            raise NotFoundError(f"Recommendation {recommendation_id} not found")
        recommendation_repository.delete_recommendation(db, recommendation)

    run_in_transaction(db, operation)
