"""Room model — bookable hotel rooms."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, IntegerPrimaryKeyMixin


class Room(IntegerPrimaryKeyMixin, Base):
    """A hotel room. Owns its bookings; deleting a room deletes them."""

    __tablename__ = "rooms"

    room_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    room_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    room_photo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    room_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="room", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, type={self.room_type!r}, price={self.room_price})>"
