"""Users API router — profiles and booking history."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import Identity, admin_only, get_current_identity, get_current_user, get_db
from app.models.user import User
from app.schemas.responses import ApiResponse, UserResponse
from app.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/all", response_model=ApiResponse, response_model_exclude_none=True, summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    users = await user_service.list_users(db)
    return ApiResponse(user_list=[UserResponse.from_user(u) for u in users])


@router.get(
    "/get-by-id/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Get a user by id",
)
async def get_user_by_id(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(get_current_identity),
) -> ApiResponse:
    user = await user_service.get_user(db, user_id)
    return ApiResponse(user=UserResponse.from_user(user))


@router.delete(
    "/delete/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(admin_only),
) -> ApiResponse:
    """Delete a user and cascade-delete their bookings."""
    await user_service.delete_user(db, user_id)
    return ApiResponse()


@router.get(
    "/get-logged-in-profile-info",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="Current user's profile",
)
async def get_logged_in_profile(current_user: User = Depends(get_current_user)) -> ApiResponse:
    return ApiResponse(user=UserResponse.from_user(current_user))


@router.get(
    "/get-user-bookings/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
    summary="A user's booking history",
)
async def get_user_bookings(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(get_current_identity),
) -> ApiResponse:
    """Return the user together with each booking and its room."""
    user = await user_service.get_user(db, user_id)
    return ApiResponse(user=UserResponse.from_user(user, with_bookings=True))
