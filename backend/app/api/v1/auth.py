"""Auth API router — register and login. Both routes are public."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.responses import ApiResponse, UserResponse
from app.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse, response_model_exclude_none=True)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)) -> ApiResponse:
    """Register a new user. Role defaults to USER."""
    user = await user_service.register_user(db, body)
    return ApiResponse(user=UserResponse.from_user(user))


@router.post("/login", response_model=ApiResponse, response_model_exclude_none=True)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> ApiResponse:
    """Authenticate with email and password and receive a bearer token."""
    result = await user_service.login(db, body.email, body.password)
    return ApiResponse(
        token=result.token,
        role=result.role,
        expiration_time=result.expiration_time,
    )
