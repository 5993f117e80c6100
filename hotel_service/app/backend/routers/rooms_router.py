from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.room import (
    AvailabilityOut,
    RoomCreatePayload,
    RoomDetailOut,
    RoomOut,
    RoomStatusPayload,
    RoomUpdatePayload,
)
from ..dependencies import require_admin
from ..models.Room import RoomStatus
from ..services import availability_service, room_registry
from ..services.actor import Actor
from .serializers import booking_to_out, room_to_detail, room_to_out

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=List[RoomOut])
def get_rooms(
    status_filter: Optional[RoomStatus] = Query(None, alias="status"),
    room_type_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    rooms = room_registry.list_rooms(db, status=status_filter, room_type_id=room_type_id)
    return [room_to_out(room) for room in rooms]


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreatePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room = room_registry.create_room(db, payload.room_number, payload.room_type_id, payload.status)
    return room_to_out(room)


@router.get("/{room_id}", response_model=RoomDetailOut)
def get_room(room_id: int, db: Session = Depends(get_db)):
    return room_to_detail(room_registry.get_room(db, room_id))


@router.put("/{room_id}", response_model=RoomOut)
def update_room(
    room_id: int,
    payload: RoomUpdatePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room = room_registry.update_room(db, room_id, room_number=payload.room_number, room_type_id=payload.room_type_id)
    return room_to_out(room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room_registry.delete_room(db, room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{room_id}/status", response_model=RoomOut)
def update_room_status(
    room_id: int,
    payload: RoomStatusPayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    room = room_registry.set_room_status(db, room_id, payload.status, admin, force=payload.force)
    return room_to_out(room)


@router.get("/{room_id}/availability", response_model=AvailabilityOut)
def check_availability(
    room_id: int,
    check_in: date = Query(...),
    check_out: date = Query(...),
    exclude_booking_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    result = availability_service.is_available(
        db, room_id, check_in, check_out, exclude_booking_id=exclude_booking_id
    )
    return AvailabilityOut(
        room_id=room_id,
        check_in=check_in,
        check_out=check_out,
        available=result.available,
        conflicts=[booking_to_out(booking) for booking in result.conflicts],
    )
