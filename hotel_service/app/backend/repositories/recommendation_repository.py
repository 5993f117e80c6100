from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc
from typing import List, Optional
from ..models.Recommendation import Recommendation


def add_recommendation(
    db: Session,
    guest_id: int,
    room_type_id: int,
    service_id: int,
    reason: Optional[str]
) -> Recommendation:
    recommendation = Recommendation(
        guest_id=guest_id,
        room_type_id=room_type_id,
        service_id=service_id,
        reason=reason
    )
    db.add(recommendation)
    db.flush()
    return recommendation


def get_recommendation_by_id(db: Session, recommendation_id: int) -> Optional[Recommendation]:
    return db.query(Recommendation).filter(Recommendation.id == recommendation_id).first()


def get_recommendations_for_guest(db: Session, guest_id: int) -> List[Recommendation]:
    return db.query(Recommendation)\
        .options(joinedload(Recommendation.room_type), joinedload(Recommendation.service))\
        .filter(Recommendation.guest_id == guest_id)\
        .order_by(desc(Recommendation.id))\
        .all()


def delete_recommendation(db: Session, recommendation: Recommendation) -> None:
    db.delete(recommendation)
    db.flush()
