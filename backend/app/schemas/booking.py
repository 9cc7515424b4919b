"""Pydantic v2 request schemas for booking endpoints."""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class BookingRequest(BaseModel):
    """Dates and guest counts for a new reservation.

    Only the check-out date is validated here (it must lie in the future).
    Ordering against the check-in date is a business rule enforced by the
    booking service so it can report a dedicated validation error.
    """

    check_in_date: date
    check_out_date: date
    num_of_adults: int = Field(1, ge=1)
    num_of_children: int = Field(0, ge=0)

    @field_validator("check_out_date")
    @classmethod
    def check_out_in_future(cls, value: date) -> date:
        if value <= date.today():
            raise ValueError("check_out_date must be a future date")
        return value
