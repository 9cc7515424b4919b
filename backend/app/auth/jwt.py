"""JWT bearer token issuing and verification.

Tokens are stateless: the signature and the embedded ``sub``/``iat``/``exp``
claims are the only source of truth. Nothing is stored server-side, so a
token stays usable until it expires even if the user logs out or changes
role. None of the verification helpers raise; they return ``None`` or
``False`` so the request pipeline can simply fall back to anonymous.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.config import settings


def token_lifetime() -> timedelta:
    """Return how long an issued token stays valid."""
    return timedelta(days=settings.jwt_token_expire_days)


def create_access_token(subject: str, issued_at: datetime | None = None) -> str:
    """Create a signed bearer token for ``subject``.

    Args:
        subject: The user's email.
        issued_at: Issue time. Defaults to the current UTC time. Identical
            inputs and key always produce the identical token.

    Returns:
        Encoded JWT string.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expires_at = issued_at + token_lifetime()
    payload = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def _decode_claims(token: str) -> dict | None:
    """Verify the signature and return the claims, ignoring expiry."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError:
        return None


def extract_subject(token: str) -> str | None:
    """Return the token's subject, or ``None`` if the token is forged or malformed."""
    claims = _decode_claims(token)
    if claims is None:
        return None
    subject = claims.get("sub")
    return subject if isinstance(subject, str) and subject else None


def is_token_expired(token: str, now: datetime | None = None) -> bool:
    """Return True if the token's ``exp`` lies before ``now``.

    A token whose claims cannot be read counts as expired.
    """
    claims = _decode_claims(token)
    if claims is None or not isinstance(claims.get("exp"), int | float):
        return True
    now = now or datetime.now(timezone.utc)
    expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    return expires_at < now


def is_token_valid(token: str, email: str, now: datetime | None = None) -> bool:
    """Check signature, subject match against ``email``, and expiry."""
    subject = extract_subject(token)
    return subject is not None and subject == email and not is_token_expired(token, now)
