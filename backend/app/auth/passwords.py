"""Password hashing for user credentials, backed by bcrypt."""

import bcrypt

_ENCODING = "utf-8"


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    hashed = bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt())
    return hashed.decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored hash.

    A stored value that is not a bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(plain_password.encode(_ENCODING), hashed_password.encode(_ENCODING))
    except ValueError:
        return False
