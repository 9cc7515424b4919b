"""Booking service — reservation creation, lookup, and cancellation.

Creating a booking is a read-check-write sequence with no locking: two
concurrent requests for the same room can both pass the availability check.
Callers needing strict at-most-one-booking-per-slot guarantees must
serialize writes per room at the database level.
"""

import logging
import secrets
import string

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.booking import Booking
from app.schemas.booking import BookingRequest
from app.services.availability import room_is_available
from app.services.room_service import get_room
from app.services.user_service import get_user

logger = logging.getLogger(__name__)

CONFIRMATION_CODE_ALPHABET = string.ascii_uppercase + string.digits
CONFIRMATION_CODE_LENGTH = 10


def generate_confirmation_code(length: int = CONFIRMATION_CODE_LENGTH) -> str:
    """Return a random ``[A-Z0-9]`` code drawn from a CSPRNG."""
    return "".join(secrets.choice(CONFIRMATION_CODE_ALPHABET) for _ in range(length))


async def create_booking(
    db: AsyncSession,
    room_id: int,
    user_id: int,
    body: BookingRequest,
) -> Booking:
    """Reserve ``room_id`` for ``user_id``.

    Every check runs before anything is written, so a rejected request
    leaves the database untouched.

    Raises:
        ValidationError: If check-out is before check-in.
        NotFoundError: If the room or the user does not exist.
        ConflictError: If the room is not available for the dates.
    """
    if body.check_out_date < body.check_in_date:
        raise ValidationError("Check-in date must come before check-out date")

    room = await get_room(db, room_id)
    user = await get_user(db, user_id)

    existing = [(b.check_in_date, b.check_out_date) for b in room.bookings]
    if not room_is_available(body.check_in_date, body.check_out_date, existing):
        logger.warning(
            "Rejected booking for room %s: %s to %s is unavailable",
            room_id,
            body.check_in_date,
            body.check_out_date,
        )
        raise ConflictError("Room not available for the selected date range")

    booking = Booking(
        check_in_date=body.check_in_date,
        check_out_date=body.check_out_date,
        num_of_adults=body.num_of_adults,
        num_of_children=body.num_of_children,
        booking_confirmation_code=generate_confirmation_code(),
    )
    booking.room = room
    booking.user = user
    db.add(booking)
    await db.flush()

    logger.info(
        "Created booking %s (%s) for room %s, user %s",
        booking.id,
        booking.booking_confirmation_code,
        room_id,
        user_id,
    )
    return booking


async def list_bookings(db: AsyncSession) -> list[Booking]:
    """Return every booking, newest first."""
    result = await db.execute(select(Booking).order_by(Booking.id.desc()))
    return list(result.scalars().all())


async def get_booking_by_confirmation_code(db: AsyncSession, confirmation_code: str) -> Booking:
    """Look up a booking by its public confirmation code."""
    result = await db.execute(
        select(Booking).where(Booking.booking_confirmation_code == confirmation_code)
    )
    booking = result.scalars().first()
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


async def cancel_booking(db: AsyncSession, booking_id: int) -> None:
    """Delete a booking by id."""
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    await db.delete(booking)
    await db.flush()
    logger.info("Cancelled booking %s", booking_id)
