from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import Money, Percentage


class AmenityPayload(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=400)


class AmenityOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ServicePayload(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal
    description: Optional[str] = Field(default=None, max_length=400)


class ServiceOut(BaseModel):
    id: int
    name: str
    price: Money
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RoomTypeServicePayload(BaseModel):
    service_id: int
    included: bool = False
    discount_percentage: Decimal = Decimal("0")


class RoomTypeServiceUpdatePayload(BaseModel):
    included: bool = False
    discount_percentage: Decimal = Decimal("0")


class RoomTypeServiceOut(BaseModel):
    room_type_id: int
    service: ServiceOut
    included: bool
    discount_percentage: Percentage

    model_config = ConfigDict(from_attributes=True)


class RecommendationPayload(BaseModel):
    guest_id: int
    room_type_id: int
    service_id: int
    reason: Optional[str] = Field(default=None, max_length=400)


class RecommendationOut(BaseModel):
    id: int
    guest_id: int
    room_type_id: int
    service_id: int
    reason: Optional[str] = None
    room_type_name: str
    room_type_price: Money
    service_name: str
    service_price: Money
