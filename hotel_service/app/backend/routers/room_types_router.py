from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.catalog import RoomTypeServiceOut, RoomTypeServicePayload, RoomTypeServiceUpdatePayload
from common.pydantic.room import RoomTypeCreatePayload, RoomTypeOut, RoomTypeUpdatePayload
from ..dependencies import require_admin
from ..services import room_registry
from ..services.actor import Actor
from .serializers import room_type_to_out

router = APIRouter(prefix="/room-types", tags=["room types"])


@router.get("", response_model=List[RoomTypeOut])
def get_room_types(db: Session = Depends(get_db)):
    room_types = room_registry.list_room_types(db)
    counts = room_registry.room_counts_by_type(db)
    return [room_type_to_out(room_type, counts.get(room_type.id, 0)) for room_type in room_types]


@router.post("", response_model=RoomTypeOut, status_code=status.HTTP_201_CREATED)
def create_room_type(
    payload: RoomTypeCreatePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room_type = room_registry.create_room_type(
        db,
        name=payload.name,
        price=payload.price,
        capacity=payload.capacity,
        description=payload.description,
        amenity_ids=payload.amenity_ids,
    )
    return room_type_to_out(room_type, 0)


@router.get("/{room_type_id}", response_model=RoomTypeOut)
def get_room_type(room_type_id: int, db: Session = Depends(get_db)):
    return room_type_to_out(room_registry.get_room_type(db, room_type_id))


@router.put("/{room_type_id}", response_model=RoomTypeOut)
def update_room_type(
    room_type_id: int,
    payload: RoomTypeUpdatePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room_type = room_registry.update_room_type(
        db,
        room_type_id,
        name=payload.name,
        price=payload.price,
        capacity=payload.capacity,
        description=payload.description,
        amenity_ids=payload.amenity_ids,
    )
    return room_type_to_out(room_type)


@router.delete("/{room_type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room_type(
    room_type_id: int,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room_registry.delete_room_type(db, room_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{room_type_id}/services", response_model=List[RoomTypeServiceOut])
def get_room_type_services(room_type_id: int, db: Session = Depends(get_db)):
    links = room_registry.list_room_type_services(db, room_type_id)
    return [RoomTypeServiceOut.model_validate(link) for link in links]


@router.post("/{room_type_id}/services", response_model=RoomTypeServiceOut, status_code=status.HTTP_201_CREATED)
def assign_service(
    room_type_id: int,
    payload: RoomTypeServicePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    link = room_registry.assign_service(
        db, room_type_id, payload.service_id, payload.included, payload.discount_percentage
    )
    return RoomTypeServiceOut.model_validate(link)


@router.put("/{room_type_id}/services/{service_id}", response_model=RoomTypeServiceOut)
def update_room_type_service(
    room_type_id: int,
    service_id: int,
    payload: RoomTypeServiceUpdatePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    link = room_registry.update_room_type_service(
        db, room_type_id, service_id, payload.included, payload.discount_percentage
    )
    return RoomTypeServiceOut.model_validate(link)


@router.delete("/{room_type_id}/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_room_type_service(
    room_type_id: int,
    service_id: int,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room_registry.remove_room_type_service(db, room_type_id, service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
