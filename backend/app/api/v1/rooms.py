"""Rooms API router.

Browsing endpoints are public. Creating, updating, and deleting rooms is
admin-only and takes multipart form data so a photo can be uploaded.
"""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import Identity, ObjectStorage, admin_only, get_db, get_storage
from app.exceptions import ValidationError
from app.schemas.responses import ApiResponse, RoomResponse
from app.services import room_service

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post(
    "/add",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Add a room",
)
async def add_room(
    photo: UploadFile | None = File(None),
    room_type: str | None = Form(None),
    room_price: Decimal | None = Form(None, ge=0),
    room_description: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    """Create a room. Photo, type, and price are required."""
    if photo is None or not photo.filename or not room_type or not room_type.strip() or room_price is None:
        raise ValidationError("Please provide values for all fields (photo, room_type, room_price)")

    room = await room_service.add_room(db, storage, photo, room_type, room_price, room_description)
    return ApiResponse(room=RoomResponse.from_room(room))


@router.get("/all", response_model=ApiResponse, response_model_exclude_none=True, summary="List rooms")
async def list_rooms(db: AsyncSession = Depends(get_db)) -> ApiResponse:
    rooms = await room_service.list_rooms(db)
    return ApiResponse(room_list=[RoomResponse.from_room(r) for r in rooms])


@router.get("/types", response_model=list[str], summary="List room types")
async def list_room_types(db: AsyncSession = Depends(get_db)) -> list[str]:
    return await room_service.list_room_types(db)


@router.get(
    "/room-by-id/{room_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Get a room with its bookings",
)
async def get_room(room_id: int, db: AsyncSession = Depends(get_db)) -> ApiResponse:
    room = await room_service.get_room(db, room_id)
    return ApiResponse(room=RoomResponse.from_room(room, with_bookings=True))


@router.get(
    "/all-available-rooms",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="List rooms with no bookings",
)
async def list_available_rooms(db: AsyncSession = Depends(get_db)) -> ApiResponse:
    rooms = await room_service.list_rooms_without_bookings(db)
    return ApiResponse(room_list=[RoomResponse.from_room(r) for r in rooms])


@router.get(
    "/available-rooms-by-date-and-type",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Search free rooms by date range and type",
)
async def find_available_rooms(
    check_in_date: date | None = Query(None, description="ISO date, e.g. 2026-06-07"),
    check_out_date: date | None = Query(None, description="ISO date, e.g. 2026-06-09"),
    room_type: str | None = Query(None, description="Substring of the room type"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    if check_in_date is None or check_out_date is None or not room_type or not room_type.strip():
        raise ValidationError("All fields are required (check_in_date, check_out_date, room_type)")

    rooms = await room_service.find_available_rooms(db, check_in_date, check_out_date, room_type)
    return ApiResponse(room_list=[RoomResponse.from_room(r) for r in rooms])


@router.put(
    "/update/{room_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Update a room",
)
async def update_room(
    room_id: int,
    photo: UploadFile | None = File(None),
    room_type: str | None = Form(None),
    room_price: Decimal | None = Form(None, ge=0),
    room_description: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    """Partially update a room. Only provided fields are changed."""
    room = await room_service.update_room(
        db,
        storage,
        room_id,
        room_type=room_type,
        room_price=room_price,
        room_description=room_description,
        photo=photo,
    )
    return ApiResponse(room=RoomResponse.from_room(room))


@router.delete(
    "/delete/{room_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Delete a room",
)
async def delete_room(
    room_id: int,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    """Delete a room and cascade-delete its bookings."""
    await room_service.delete_room(db, room_id)
    return ApiResponse()
