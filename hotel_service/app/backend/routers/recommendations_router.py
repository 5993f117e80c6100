from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.catalog import RecommendationOut, RecommendationPayload
from ..dependencies import get_current_actor, get_guest_directory, require_admin
from ..services import catalog_service
from ..services.actor import Actor
from ..services.exceptions import AuthorizationError
from ..services.guest_directory import GuestDirectory
from .serializers import recommendation_to_out

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("", response_model=RecommendationOut, status_code=status.HTTP_201_CREATED)
def create_recommendation(
    payload: RecommendationPayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
    directory: GuestDirectory = Depends(get_guest_directory),
):
    recommendation = catalog_service.create_recommendation(
        db,
        directory,
        guest_id=payload.guest_id,
        room_type_id=payload.room_type_id,
        service_id=payload.service_id,
        reason=payload.reason,
    )
    return recommendation_to_out(recommendation)


@router.get("/guest/{guest_id}", response_model=List[RecommendationOut])
def get_guest_recommendations(
    guest_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    if not (actor.is_admin or actor.owns(guest_id)):
        raise AuthorizationError("You can only view your own recommendations")
    recommendations = catalog_service.list_recommendations_for_guest(db, guest_id)
    return [recommendation_to_out(r) for r in recommendations]


@router.delete("/{recommendation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recommendation(
    recommendation_id: int,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    catalog_service.delete_recommendation(db, recommendation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
