"""Per-request bearer authentication and role gates.

``identify_request`` runs for every routed request (it is installed as an
application-wide dependency) and attaches an :class:`Identity` to
``request.state.identity`` when the request carries a valid token. It never
rejects a request by itself: a missing, malformed, forged, or expired token
simply leaves the request anonymous. Rejection happens only in the route
gates below (``get_current_identity`` and ``require_roles``).
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import extract_subject, is_token_valid
from app.config import settings
from app.database import get_db
from app.exceptions import AuthFailure, ForbiddenError
from app.models.user import Role, User
from app.services.user_service import get_user_by_email, get_user

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

UserLookup = Callable[[str], Awaitable[User | None]]


@dataclass(frozen=True)
class Identity:
    """The authenticated principal attached to a request."""

    user_id: int
    email: str
    role: Role

    @property
    def authority(self) -> str:
        return self.role.value


def is_public_path(path: str, prefixes: Iterable[str] | None = None) -> bool:
    """Return True if ``path`` is a public prefix or lies beneath one.

    Prefixes match whole path segments: ``/auth`` covers ``/auth/login`` but
    not ``/authz``.
    """
    if prefixes is None:
        prefixes = settings.public_path_prefixes
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


async def authenticate_request(
    authorization: str | None,
    path: str,
    lookup: UserLookup,
    current: Identity | None = None,
) -> Identity | None:
    """Resolve the identity behind a raw ``Authorization`` header.

    Args:
        authorization: The header value, if any.
        path: Request path, checked against the public allowlist.
        lookup: Async callable resolving an email to a ``User``.
        current: Identity already attached to the request, if any.

    Returns:
        The identity to attach, or ``None`` for an anonymous request.
    """
    if is_public_path(path):
        return current

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return current

    token = authorization[len(BEARER_PREFIX):]
    if not token.strip():
        return current

    email = extract_subject(token)
    if email is None:
        return current

    if current is not None:
        return current

    user = await lookup(email)
    if user is None:
        return None

    if not is_token_valid(token, user.email):
        return None

    return Identity(user_id=user.id, email=user.email, role=user.role)


async def identify_request(request: Request, db: AsyncSession = Depends(get_db)) -> Identity | None:
    """Attach the caller's identity to ``request.state``. Never raises."""

    async def lookup(email: str) -> User | None:
        return await get_user_by_email(db, email)

    identity = await authenticate_request(
        request.headers.get("Authorization"),
        request.url.path,
        lookup,
        getattr(request.state, "identity", None),
    )
    request.state.identity = identity
    return identity


async def get_current_identity(identity: Identity | None = Depends(identify_request)) -> Identity:
    """Require an authenticated caller.

    Raises:
        AuthFailure: If no valid identity is attached to the request.
    """
    if identity is None:
        raise AuthFailure("Authentication required")
    return identity


def require_roles(*roles: Role) -> Callable[..., Awaitable[Identity]]:
    """Build a dependency that admits only callers holding one of ``roles``."""
    allowed = frozenset(roles)

    async def _check(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            logger.warning("User %s (%s) denied access", identity.user_id, identity.authority)
            raise ForbiddenError("Access denied for this role")
        return identity

    return _check


async def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the full ``User`` row for the authenticated caller."""
    return await get_user(db, identity.user_id)
