"""Response envelope and nested DTOs shared by every endpoint.

Every JSON body carries ``status_code`` and ``message``; the remaining
fields are filled only by the endpoints that need them and are dropped from
the output when ``None``. Users, rooms, and bookings reference each other,
so the DTOs are built through explicit ``from_*`` constructors that decide
how deep to nest instead of walking ORM relationships blindly.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from app.models.booking import Booking
from app.models.room import Room
from app.models.user import Role, User

SUCCESS_MESSAGE = "successful"


class BookingResponse(BaseModel):
    """Public reservation information."""

    id: int
    check_in_date: date
    check_out_date: date
    num_of_adults: int
    num_of_children: int
    total_num_of_guest: int
    booking_confirmation_code: str
    user: UserResponse | None = None
    room: RoomResponse | None = None

    @classmethod
    def from_booking(
        cls,
        booking: Booking,
        *,
        with_user: bool = False,
        with_room: bool = False,
    ) -> BookingResponse:
        return cls(
            id=booking.id,
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
            num_of_adults=booking.num_of_adults,
            num_of_children=booking.num_of_children,
            total_num_of_guest=booking.total_num_of_guest,
            booking_confirmation_code=booking.booking_confirmation_code,
            user=UserResponse.from_user(booking.user) if with_user else None,
            room=RoomResponse.from_room(booking.room) if with_room else None,
        )


class UserResponse(BaseModel):
    """Public user profile. Never includes the password hash."""

    id: int
    email: str
    name: str
    phone_number: str | None = None
    role: Role
    bookings: list[BookingResponse] | None = None

    @classmethod
    def from_user(cls, user: User, *, with_bookings: bool = False) -> UserResponse:
        bookings = None
        if with_bookings and user.bookings:
            bookings = [BookingResponse.from_booking(b, with_room=True) for b in user.bookings]
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            phone_number=user.phone_number,
            role=user.role,
            bookings=bookings,
        )


class RoomResponse(BaseModel):
    """Public room information."""

    id: int
    room_type: str
    room_price: Decimal
    room_photo_url: str | None = None
    room_description: str | None = None
    bookings: list[BookingResponse] | None = None

    @classmethod
    def from_room(cls, room: Room, *, with_bookings: bool = False) -> RoomResponse:
        bookings = None
        if with_bookings:
            bookings = [BookingResponse.from_booking(b) for b in room.bookings]
        return cls(
            id=room.id,
            room_type=room.room_type,
            room_price=room.room_price,
            room_photo_url=room.room_photo_url,
            room_description=room.room_description,
            bookings=bookings,
        )


class ApiResponse(BaseModel):
    """Standard envelope returned by every endpoint, success or failure."""

    status_code: int = 200
    message: str = SUCCESS_MESSAGE

    token: str | None = None
    role: Role | None = None
    expiration_time: str | None = None
    booking_confirmation_code: str | None = None

    user: UserResponse | None = None
    room: RoomResponse | None = None
    booking: BookingResponse | None = None

    user_list: list[UserResponse] | None = None
    room_list: list[RoomResponse] | None = None
    booking_list: list[BookingResponse] | None = None


BookingResponse.model_rebuild()
UserResponse.model_rebuild()
RoomResponse.model_rebuild()
