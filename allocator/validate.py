"""
Booking invariant checks: whole rooms on intake, single bookings on commit.
"""

from itertools import combinations
from typing import Iterable, List, Tuple

from .models import Booking, OperatingRoom


class BookingInvariantError(RuntimeError):
    """Room state is inconsistent; a commit bypassed re-validation."""


def room_violations(room: OperatingRoom) -> List[str]:
    violations = []
    active = room.active_bookings()
    for b in active:
        if b.start_time >= b.end_time:
            violations.append(f"Room {room.id}: booking {b.id} starts at or after its end")
        if b.room_id != room.id:
            violations.append(f"Room {room.id}: booking {b.id} is filed under room {b.room_id}")
    for a, b in combinations(active, 2):
        if a.overlaps(b.start_time, b.end_time):
            violations.append(
                f"Room {room.id}: bookings {a.id} ({a.start_time:%Y-%m-%d %H:%M}-{a.end_time:%H:%M}) "
                f"and {b.id} ({b.start_time:%Y-%m-%d %H:%M}-{b.end_time:%H:%M}) overlap")
    return violations


def booking_violations(room: OperatingRoom, booking: Booking) -> List[str]:
    """Check one booking against the room's other active bookings."""
    violations = []
    if booking.start_time >= booking.end_time:
        violations.append(f"Room {room.id}: booking {booking.id} starts at or after its end")
    if booking.room_id != room.id:
        violations.append(f"Room {room.id}: booking {booking.id} is filed under room {booking.room_id}")
    for other in room.active_bookings():
        if other.id != booking.id and other.overlaps(booking.start_time, booking.end_time):
            violations.append(f"Room {room.id}: booking {booking.id} overlaps {other.id}")
    return violations


def validate_rooms(rooms: Iterable[OperatingRoom]) -> Tuple[bool, List[str]]:
    """
    Validate all rooms against the booking invariants.
    Returns (is_valid, list_of_violation_messages).
    """
    violations = []
    for room in rooms:
        violations.extend(room_violations(room))
    return len(violations) == 0, violations


def assert_room_consistent(room: OperatingRoom) -> None:
    violations = room_violations(room)
    if violations:
        raise BookingInvariantError("; ".join(violations))


def assert_booking_fits(room: OperatingRoom, booking: Booking) -> None:
    """Raise before `booking` is added to a room it would break."""
    violations = booking_violations(room, booking)
    if violations:
        raise BookingInvariantError("; ".join(violations))
