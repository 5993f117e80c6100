from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hotel_service.app.backend.models.Room import RoomStatus
from .booking import BookingOut
from .catalog import AmenityOut, RoomTypeServiceOut
from .types import Money


class RoomCreatePayload(BaseModel):
    room_number: str = Field(min_length=1, max_length=20)
    room_type_id: int
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdatePayload(BaseModel):
    room_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    room_type_id: Optional[int] = None


class RoomStatusPayload(BaseModel):
    status: RoomStatus
    # явне перевизначення статусу кімнати з активним підтвердженим бронюванням
    force: bool = False


class RoomOut(BaseModel):
    id: int
    room_number: str
    status: RoomStatus
    room_type_id: int
    room_type_name: str
    price: Money
    capacity: int


class RoomDetailOut(RoomOut):
    room_type_description: Optional[str] = None
    amenities: List[AmenityOut] = []
    services: List[RoomTypeServiceOut] = []


class AvailabilityOut(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    available: bool
    conflicts: List[BookingOut] = []


class RoomTypeCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal
    capacity: int
    description: Optional[str] = Field(default=None, max_length=400)
    amenity_ids: List[int] = []


class RoomTypeUpdatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal
    capacity: int
    description: Optional[str] = Field(default=None, max_length=400)
    # None - не чіпати зручності, [] - очистити
    amenity_ids: Optional[List[int]] = None


class RoomTypeOut(BaseModel):
    id: int
    name: str
    price: Money
    capacity: int
    description: Optional[str] = None
    room_count: int = 0
    amenities: List[AmenityOut] = []

    model_config = ConfigDict(from_attributes=True)
