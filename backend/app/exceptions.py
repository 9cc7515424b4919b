"""Domain error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
the standard ``{"status_code", "message"}`` response envelope.
"""

from fastapi import status


class HotelBookingError(Exception):
    """Base class for business-rule failures with an HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HotelBookingError):
    """Malformed or inconsistent input, e.g. check-out before check-in."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(HotelBookingError):
    """A referenced room, user, or booking does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(HotelBookingError):
    """The room is not available for the requested dates."""

    status_code = status.HTTP_409_CONFLICT


class AuthFailure(HotelBookingError):
    """Bad credentials at login, or no authenticated identity on a protected route."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(HotelBookingError):
    """The authenticated identity lacks the required authority."""

    status_code = status.HTTP_403_FORBIDDEN


class StorageError(HotelBookingError):
    """The object store rejected an upload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
