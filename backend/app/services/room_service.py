"""Room service — room CRUD and availability search."""

import logging
from datetime import date
from decimal import Decimal

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.booking import Booking
from app.models.room import Room
from app.services.storage import ObjectStorage

logger = logging.getLogger(__name__)


async def _upload_photo(storage: ObjectStorage, photo: UploadFile) -> str:
    data = await photo.read()
    return await storage.upload_image(data, photo.filename or "photo", photo.content_type)


async def get_room(db: AsyncSession, room_id: int) -> Room:
    """Fetch a room (with its bookings) or raise ``NotFoundError``."""
    room = await db.get(Room, room_id)
    if room is None:
        raise NotFoundError("Room not found")
    return room


async def add_room(
    db: AsyncSession,
    storage: ObjectStorage,
    photo: UploadFile,
    room_type: str,
    room_price: Decimal,
    room_description: str | None = None,
) -> Room:
    """Upload the photo, then persist a new room pointing at it."""
    photo_url = await _upload_photo(storage, photo)
    room = Room(
        room_type=room_type,
        room_price=room_price,
        room_photo_url=photo_url,
        room_description=room_description,
    )
    db.add(room)
    await db.flush()
    await db.refresh(room)
    logger.info("Created room %s (%s)", room.id, room.room_type)
    return room


async def list_rooms(db: AsyncSession) -> list[Room]:
    """Return every room, newest first."""
    result = await db.execute(select(Room).order_by(Room.id.desc()))
    return list(result.scalars().all())


async def list_room_types(db: AsyncSession) -> list[str]:
    """Return the distinct room types on offer."""
    result = await db.execute(select(Room.room_type).distinct().order_by(Room.room_type))
    return list(result.scalars().all())


async def list_rooms_without_bookings(db: AsyncSession) -> list[Room]:
    """Return rooms that have no reservations at all."""
    result = await db.execute(select(Room).where(~Room.bookings.any()).order_by(Room.id))
    return list(result.scalars().all())


async def find_available_rooms(
    db: AsyncSession,
    check_in_date: date,
    check_out_date: date,
    room_type: str,
) -> list[Room]:
    """Return rooms whose type contains ``room_type`` and that are free for the range.

    A room is excluded if any booking touches the range, boundaries included.
    """
    booked_room_ids = select(Booking.room_id).where(
        Booking.check_in_date <= check_out_date,
        Booking.check_out_date >= check_in_date,
    )
    result = await db.execute(
        select(Room)
        .where(
            Room.room_type.contains(room_type, autoescape=True),
            Room.id.not_in(booked_room_ids),
        )
        .order_by(Room.id)
    )
    return list(result.scalars().all())


async def update_room(
    db: AsyncSession,
    storage: ObjectStorage,
    room_id: int,
    room_type: str | None = None,
    room_price: Decimal | None = None,
    room_description: str | None = None,
    photo: UploadFile | None = None,
) -> Room:
    """Apply the provided fields to a room. Omitted fields are left unchanged."""
    room = await get_room(db, room_id)

    if photo is not None and photo.filename:
        room.room_photo_url = await _upload_photo(storage, photo)
    if room_type is not None:
        room.room_type = room_type
    if room_price is not None:
        room.room_price = room_price
    if room_description is not None:
        room.room_description = room_description

    await db.flush()
    logger.info("Updated room %s", room_id)
    return room


async def delete_room(db: AsyncSession, room_id: int) -> None:
    """Delete a room together with all of its bookings."""
    room = await get_room(db, room_id)
    await db.delete(room)
    await db.flush()
    logger.info("Deleted room %s", room_id)
