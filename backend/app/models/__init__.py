"""SQLAlchemy models for the hotel booking API.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs. If you add a new model, import it in this file.
"""

from app.models.booking import Booking
from app.models.room import Room
from app.models.user import Role, User

__all__ = [
    "Booking",
    "Role",
    "Room",
    "User",
]
