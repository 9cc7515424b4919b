"""Booking model — room reservations."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.database import Base, IntegerPrimaryKeyMixin


class Booking(IntegerPrimaryKeyMixin, Base):
    """A reservation of one room by one user for a date range.

    ``total_num_of_guest`` is derived: every assignment to ``num_of_adults``
    or ``num_of_children`` recomputes it. The confirmation code can be set
    once and never changed afterwards.
    """

    __tablename__ = "bookings"

    room_id: Mapped[int] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    num_of_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    num_of_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_num_of_guest: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Not unique at the database level; uniqueness relies on 36**10 random codes.
    booking_confirmation_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    # Relationships
    room: Mapped["Room"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    user: Mapped["User"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    def __init__(self, **kwargs) -> None:
        # same defaults as the columns, applied before the validators run
        kwargs.setdefault("num_of_adults", 1)
        kwargs.setdefault("num_of_children", 0)
        super().__init__(**kwargs)

    @validates("num_of_adults", "num_of_children")
    def _recompute_total_guests(self, key: str, value: int) -> int:
        adults = value if key == "num_of_adults" else (self.num_of_adults or 0)
        children = value if key == "num_of_children" else (self.num_of_children or 0)
        self.total_num_of_guest = adults + children
        return value

    @validates("booking_confirmation_code")
    def _freeze_confirmation_code(self, key: str, value: str) -> str:
        current = self.booking_confirmation_code
        if current is not None and value != current:
            raise ValueError("booking_confirmation_code cannot be changed once assigned")
        return value

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, room_id={self.room_id}, user_id={self.user_id}, "
            f"code={self.booking_confirmation_code!r})>"
        )
