"""Room availability check for a candidate stay.

The rule set below is broader than a plain interval-overlap test. The
check-out rule rejects any candidate whose check-out falls before an existing
booking's check-out, even when the two stays do not share a night.
"""

from collections.abc import Iterable
from datetime import date

StayDates = tuple[date, date]


def _conflicts(check_in: date, check_out: date, existing_in: date, existing_out: date) -> bool:
    return (
        # same check-in day
        check_in == existing_in
        # leaves before the existing stay ends
        or check_out < existing_out
        # arrives during the existing stay
        or existing_in < check_in < existing_out
        # arrives earlier, leaves the same day
        or (check_in < existing_in and check_out == existing_out)
        # encloses the existing stay
        or (check_in < existing_in and check_out > existing_out)
        # mirrored range
        or (check_in == existing_out and check_out == existing_in)
        # zero-night stay on the existing check-out day
        or (check_in == existing_out and check_out == check_in)
    )


def room_is_available(check_in: date, check_out: date, existing: Iterable[StayDates]) -> bool:
    """Return True if the candidate stay conflicts with none of ``existing``.

    Args:
        check_in: Candidate check-in date.
        check_out: Candidate check-out date.
        existing: ``(check_in, check_out)`` pairs already booked on the room,
            excluding the candidate itself. Order does not matter.
    """
    return not any(
        _conflicts(check_in, check_out, existing_in, existing_out) for existing_in, existing_out in existing
    )
