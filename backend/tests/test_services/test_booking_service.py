"""Tests for booking creation, lookup, and cancellation at the service layer."""

import re

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.booking import Booking
from app.models.room import Room
from app.models.user import User
from app.schemas.booking import BookingRequest
from app.services import booking_service
from factories import create_booking, days_from_today

CODE_PATTERN = re.compile(r"^[A-Z0-9]{10}$")


def _request(check_in_offset: int, check_out_offset: int, adults: int = 2, children: int = 1) -> BookingRequest:
    return BookingRequest(
        check_in_date=days_from_today(check_in_offset),
        check_out_date=days_from_today(check_out_offset),
        num_of_adults=adults,
        num_of_children=children,
    )


async def _booking_count(db_session: AsyncSession) -> int:
    return (await db_session.execute(select(func.count()).select_from(Booking))).scalar_one()


class TestGenerateConfirmationCode:
    def test_format(self):
        for _ in range(50):
            assert CODE_PATTERN.match(booking_service.generate_confirmation_code())

    def test_codes_differ(self):
        codes = {booking_service.generate_confirmation_code() for _ in range(100)}
        assert len(codes) == 100


class TestCreateBooking:
    async def test_creates_booking_with_code_and_guest_total(
        self, db_session: AsyncSession, test_room: Room, test_user: User
    ):
        booking = await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(3, 6))

        assert booking.id is not None
        assert CODE_PATTERN.match(booking.booking_confirmation_code)
        assert booking.total_num_of_guest == 3
        assert booking.room is test_room
        assert booking.user is test_user
        assert booking in test_room.bookings
        assert await _booking_count(db_session) == 1

    async def test_missing_room(self, db_session: AsyncSession, test_user: User):
        with pytest.raises(NotFoundError, match="Room not found"):
            await booking_service.create_booking(db_session, 999, test_user.id, _request(3, 6))
        assert await _booking_count(db_session) == 0

    async def test_missing_user(self, db_session: AsyncSession, test_room: Room):
        with pytest.raises(NotFoundError, match="User not found"):
            await booking_service.create_booking(db_session, test_room.id, 999, _request(3, 6))
        assert await _booking_count(db_session) == 0

    async def test_check_out_before_check_in(self, db_session: AsyncSession, test_room: Room, test_user: User):
        with pytest.raises(ValidationError):
            await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(6, 3))
        assert await _booking_count(db_session) == 0

    async def test_date_order_checked_before_room_lookup(self, db_session: AsyncSession, test_user: User):
        with pytest.raises(ValidationError):
            await booking_service.create_booking(db_session, 999, test_user.id, _request(6, 3))

    async def test_overlap_is_a_conflict(self, db_session: AsyncSession, test_room: Room, test_user: User):
        await create_booking(db_session, test_room, test_user, days_from_today(10), days_from_today(15))

        with pytest.raises(ConflictError, match="Room not available"):
            await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(12, 20))
        assert await _booking_count(db_session) == 1

    async def test_back_to_back_stay_is_accepted(self, db_session: AsyncSession, test_room: Room, test_user: User):
        await create_booking(db_session, test_room, test_user, days_from_today(10), days_from_today(15))

        booking = await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(15, 18))
        assert booking.check_in_date == days_from_today(15)
        assert await _booking_count(db_session) == 2

    async def test_second_identical_request_conflicts(
        self, db_session: AsyncSession, test_room: Room, test_user: User
    ):
        await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(3, 6))
        with pytest.raises(ConflictError):
            await booking_service.create_booking(db_session, test_room.id, test_user.id, _request(3, 6))


class TestLookupAndCancel:
    async def test_find_by_confirmation_code(self, db_session: AsyncSession, test_room: Room, test_user: User):
        created = await create_booking(
            db_session, test_room, test_user, days_from_today(2), days_from_today(4), code="ABCDE12345"
        )
        found = await booking_service.get_booking_by_confirmation_code(db_session, "ABCDE12345")
        assert found is created

    async def test_unknown_code(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError, match="Booking not found"):
            await booking_service.get_booking_by_confirmation_code(db_session, "ZZZZZZZZZZ")

    async def test_list_newest_first(self, db_session: AsyncSession, test_room: Room, test_user: User):
        first = await create_booking(db_session, test_room, test_user, days_from_today(2), days_from_today(4))
        second = await create_booking(db_session, test_room, test_user, days_from_today(6), days_from_today(8))
        assert await booking_service.list_bookings(db_session) == [second, first]

    async def test_cancel(self, db_session: AsyncSession, test_room: Room, test_user: User):
        booking = await create_booking(db_session, test_room, test_user, days_from_today(2), days_from_today(4))
        await booking_service.cancel_booking(db_session, booking.id)
        assert await _booking_count(db_session) == 0

    async def test_cancel_unknown(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await booking_service.cancel_booking(db_session, 12345)
