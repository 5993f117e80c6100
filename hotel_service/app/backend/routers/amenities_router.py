from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.catalog import AmenityOut, AmenityPayload
from ..dependencies import require_admin
from ..services import catalog_service
from ..services.actor import Actor

router = APIRouter(prefix="/amenities", tags=["amenities"])


@router.get("", response_model=List[AmenityOut])
def get_amenities(db: Session = Depends(get_db)):
    return catalog_service.list_amenities(db)


@router.post("", response_model=AmenityOut, status_code=status.HTTP_201_CREATED)
def create_amenity(payload: AmenityPayload, db: Session = Depends(get_db), admin: Actor = Depends(require_admin)):
    return catalog_service.create_amenity(db, payload.name, payload.description)


@router.get("/{amenity_id}", response_model=AmenityOut)
def get_amenity(amenity_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_amenity(db, amenity_id)


@router.put("/{amenity_id}", response_model=AmenityOut)
def update_amenity(
    amenity_id: int,
    payload: AmenityPayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    return catalog_service.update_amenity(db, amenity_id, payload.name, payload.description)


@router.delete("/{amenity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_amenity(amenity_id: int, db: Session = Depends(get_db), admin: Actor = Depends(require_admin)):
    catalog_service.delete_amenity(db, amenity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
