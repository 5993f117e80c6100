from typing import Optional

from common.pydantic.booking import BookingDetailOut, BookingListItemOut, BookingOut
from common.pydantic.catalog import AmenityOut, RecommendationOut, RoomTypeServiceOut
from common.pydantic.payment import PaymentOut, PaymentSummary
from common.pydantic.room import RoomDetailOut, RoomOut, RoomTypeOut
from ..models.Booking import Booking
from ..models.Recommendation import Recommendation
from ..models.Room import Room, RoomType


def booking_to_out(booking: Booking) -> BookingOut:
    room = booking.room
    return BookingOut(
        id=booking.id,
        guest_id=booking.guest_id,
        room_id=booking.room_id,
        room_number=room.room_number if room else None,
        room_type_name=room.room_type.name if room and room.room_type else None,
        check_in=booking.check_in,
        check_out=booking.check_out,
        status=booking.status,
        total_price=booking.total_price,
        created_at=booking.created_at,
    )


def booking_to_list_item(booking: Booking, summary: PaymentSummary) -> BookingListItemOut:
    return BookingListItemOut(**booking_to_out(booking).model_dump(), payment_summary=summary)


def booking_to_detail(booking: Booking, summary: PaymentSummary) -> BookingDetailOut:
    return BookingDetailOut(
        **booking_to_out(booking).model_dump(),
        room_status=booking.room.status.value if booking.room else None,
        payments=[PaymentOut.model_validate(payment) for payment in booking.payments],
        payment_summary=summary,
    )


def room_to_out(room: Room) -> RoomOut:
    return RoomOut(
        id=room.id,
        room_number=room.room_number,
        status=room.status,
        room_type_id=room.room_type_id,
        room_type_name=room.room_type.name,
        price=room.room_type.price,
        capacity=room.room_type.capacity,
    )


def room_to_detail(room: Room) -> RoomDetailOut:
    room_type = room.room_type
    return RoomDetailOut(
        **room_to_out(room).model_dump(),
        room_type_description=room_type.description,
        amenities=[AmenityOut.model_validate(amenity) for amenity in room_type.amenities],
        services=[RoomTypeServiceOut.model_validate(link) for link in room_type.services],
    )


def room_type_to_out(room_type: RoomType, room_count: Optional[int] = None) -> RoomTypeOut:
    return RoomTypeOut(
        id=room_type.id,
        name=room_type.name,
        price=room_type.price,
        capacity=room_type.capacity,
        description=room_type.description,
        room_count=room_count if room_count is not None else len(room_type.rooms),
        amenities=[AmenityOut.model_validate(amenity) for amenity in room_type.amenities],
    )


def recommendation_to_out(recommendation: Recommendation) -> RecommendationOut:
    return RecommendationOut(
        id=recommendation.id,
        guest_id=recommendation.guest_id,
        room_type_id=recommendation.room_type_id,
        service_id=recommendation.service_id,
        reason=recommendation.reason,
        room_type_name=recommendation.room_type.name,
        room_type_price=recommendation.room_type.price,
        service_name=recommendation.service.name,
        service_price=recommendation.service.price,
    )
