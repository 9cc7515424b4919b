"""User service — registration, login, and identity-store lookups."""

import logging
from dataclasses import dataclass

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import create_access_token
from app.auth.passwords import hash_password, verify_password
from app.config import settings
from app.exceptions import AuthFailure, NotFoundError, ValidationError
from app.models.user import Role, User
from app.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What a successful login hands back to the client."""

    token: str
    role: Role
    expiration_time: str


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by their login email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def email_exists(db: AsyncSession, email: str) -> bool:
    """Return True if an account with ``email`` is already registered."""
    result = await db.execute(select(exists().where(User.email == email)))
    return bool(result.scalar())


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Fetch a user by id or raise ``NotFoundError``."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def register_user(db: AsyncSession, body: RegisterRequest) -> User:
    """Create an account with a bcrypt-hashed password."""
    if await email_exists(db, body.email):
        raise ValidationError(f"{body.email} already exists")

    user = User(
        email=body.email,
        name=body.name,
        phone_number=body.phone_number,
        hashed_password=hash_password(body.password),
        role=body.role or Role.USER,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user


async def login(db: AsyncSession, email: str, password: str) -> LoginResult:
    """Verify credentials and issue a bearer token.

    Raises:
        AuthFailure: If the email is unknown or the password does not match.
    """
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt for %s", email)
        raise AuthFailure("Invalid email or password")

    return LoginResult(
        token=create_access_token(user.email),
        role=user.role,
        expiration_time=settings.token_expiration_label,
    )


async def list_users(db: AsyncSession) -> list[User]:
    """Return every user, oldest first."""
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user together with all of their bookings."""
    user = await get_user(db, user_id)
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", user_id)
