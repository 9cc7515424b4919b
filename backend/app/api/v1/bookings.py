"""Bookings API router.

Creating a booking needs any authenticated role; listing and cancelling are
admin-only. Lookup by confirmation code is public so guests can check their
reservation without logging in.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import Identity, admin_only, any_role, get_db
from app.schemas.booking import BookingRequest
from app.schemas.responses import ApiResponse, BookingResponse
from app.services import booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "/book-room/{room_id}/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Book a room",
)
async def book_room(
    room_id: int,
    user_id: int,
    body: BookingRequest,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(any_role),
) -> ApiResponse:
    """Reserve a room for a user and return the confirmation code."""
    booking = await booking_service.create_booking(db, room_id, user_id, body)
    return ApiResponse(booking_confirmation_code=booking.booking_confirmation_code)


@router.get(
    "/all",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="List all bookings",
)
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    bookings = await booking_service.list_bookings(db)
    return ApiResponse(booking_list=[BookingResponse.from_booking(b) for b in bookings])


@router.get(
    "/get-by-confirmation-code/{confirmation_code}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Find a booking by confirmation code",
)
async def get_booking_by_confirmation_code(
    confirmation_code: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    booking = await booking_service.get_booking_by_confirmation_code(db, confirmation_code)
    return ApiResponse(booking=BookingResponse.from_booking(booking, with_user=True, with_room=True))


@router.delete(
    "/cancel/{booking_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    await booking_service.cancel_booking(db, booking_id)
    return ApiResponse()
