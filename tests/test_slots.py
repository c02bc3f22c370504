from datetime import timedelta

import pytest

from allocator.catalog import DEFAULT_CONFIG, WORKING_HOURS, build_rooms
from allocator.models import AllocatorConfig, BookingStatus, Equipment, SurgeryType, WorkingHours
from allocator.slots import find_slot, first_gap_in_room, is_within_working_hours, next_working_start

from conftest import MONDAY_9AM, at, booking, rooms_with

HEART = SurgeryType.HEART_SURGERY
BRAIN = SurgeryType.BRAIN_SURGERY


@pytest.mark.parametrize("start, end, expected", [
    (at(0, 10), at(0, 13), True),
    (at(0, 15), at(0, 18), True),     # ending exactly at closing is fine
    (at(0, 16), at(0, 19), False),
    (at(0, 9), at(0, 12), False),
    (at(0, 17), at(1, 10), False),
    (at(5, 11), at(5, 14), False),    # Saturday
    (at(6, 11), at(6, 14), False),    # Sunday
])
def test_is_within_working_hours(start, end, expected):
    assert is_within_working_hours(start, end, WORKING_HOURS) is expected


@pytest.mark.parametrize("moment, expected", [
    (at(0, 9), at(0, 10)),      # before opening: same day
    (at(0, 10), at(1, 10)),
    (at(0, 17, 30), at(1, 10)),
    (at(4, 16), at(7, 10)),     # Friday afternoon -> Monday
    (at(5, 8), at(7, 10)),      # Saturday morning -> Monday
])
def test_next_working_start(moment, expected):
    assert next_working_start(moment, WORKING_HOURS) == expected


def test_working_hours_validation():
    with pytest.raises(ValueError):
        WorkingHours(start_hour=18, end_hour=10)
    with pytest.raises(ValueError):
        WorkingHours(weekdays=frozenset())


def test_slot_after_existing_booking():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings.append(booking(1, at(0, 10), at(0, 13)))
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    assert (slot.room_id, slot.start_time, slot.end_time) == (1, at(0, 13), at(0, 16))


def test_empty_room_before_opening_gets_opening_time():
    slot = find_slot(HEART, rooms_with((1, [Equipment.ECG])), MONDAY_9AM)
    assert (slot.start_time, slot.end_time) == (at(0, 10), at(0, 13))


def test_now_inside_working_hours_is_first_candidate():
    slot = find_slot(HEART, rooms_with((1, [Equipment.ECG])), at(0, 11, 15))
    assert (slot.start_time, slot.end_time) == (at(0, 11, 15), at(0, 14, 15))


def test_duration_follows_room_equipment():
    mri_only = find_slot(BRAIN, rooms_with((1, [Equipment.MRI])), MONDAY_9AM)
    with_ct = find_slot(BRAIN, rooms_with((1, [Equipment.MRI, Equipment.CT])), MONDAY_9AM)
    assert mri_only.end_time - mri_only.start_time == timedelta(hours=3)
    assert with_ct.end_time - with_ct.start_time == timedelta(hours=2)


def test_first_room_by_id_wins_over_earlier_slot_elsewhere():
    rooms = rooms_with((2, [Equipment.ECG]), (1, [Equipment.ECG]))
    room1 = next(r for r in rooms if r.id == 1)
    room1.bookings.append(booking(1, at(0, 10), at(0, 13)))
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    # Room 2 is free at 10:00, but room 1 comes first and has a gap at 13:00
    assert (slot.room_id, slot.start_time) == (1, at(0, 13))


def test_gap_between_bookings_is_used_when_it_fits():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings += [
        booking(1, at(0, 14), at(0, 17)),
        booking(1, at(0, 10), at(0, 11)),
    ]
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    assert (slot.start_time, slot.end_time) == (at(0, 11), at(0, 14))


def test_gap_too_small_moves_to_next_gap():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings += [
        booking(1, at(0, 10), at(0, 11)),
        booking(1, at(0, 13), at(0, 15)),
    ]
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    assert (slot.start_time, slot.end_time) == (at(0, 15), at(0, 18))


def test_late_gap_snaps_to_next_working_day():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings.append(booking(1, at(0, 10), at(0, 16)))
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    assert (slot.start_time, slot.end_time) == (at(1, 10), at(1, 13))


def test_friday_evening_snaps_over_weekend():
    slot = find_slot(HEART, rooms_with((1, [Equipment.ECG])), at(4, 16))
    assert slot.start_time == at(7, 10)


def test_full_week_abandons_room_for_next_one():
    rooms = rooms_with((1, [Equipment.ECG]), (2, [Equipment.ECG]))
    rooms[0].bookings += [booking(1, at(d, 10), at(d, 18)) for d in range(5)]
    slot = find_slot(HEART, rooms, MONDAY_9AM)
    assert (slot.room_id, slot.start_time) == (2, at(0, 10))


def test_nothing_within_horizon_returns_none():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings += [booking(1, at(d, 10), at(d, 18)) for d in range(5)]
    assert find_slot(HEART, rooms, MONDAY_9AM) is None


def test_short_horizon():
    config = AllocatorConfig(horizon=timedelta(hours=2))
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings.append(booking(1, at(0, 10), at(0, 13)))
    # Next gap starts at 13:00, more than two hours after now
    assert find_slot(HEART, rooms, MONDAY_9AM, config) is None
    assert find_slot(HEART, rooms, at(0, 11), config).start_time == at(0, 13)


def test_surgery_longer_than_working_day_never_fits():
    config = AllocatorConfig(working_hours=WorkingHours(start_hour=10, end_hour=12))
    assert find_slot(HEART, rooms_with((1, [Equipment.ECG])), MONDAY_9AM, config) is None


def test_past_bookings_never_yield_past_slots():
    rooms = rooms_with((1, [Equipment.ECG]))
    rooms[0].bookings.append(booking(1, at(0, 10), at(0, 11)))
    slot = find_slot(HEART, rooms, at(0, 14))
    assert slot.start_time == at(0, 14)


def test_cancelled_bookings_are_ignored():
    rooms = rooms_with((1, [Equipment.ECG]))
    cancelled = booking(1, at(0, 10), at(0, 13))
    cancelled.status = BookingStatus.CANCELLED
    rooms[0].bookings.append(cancelled)
    assert find_slot(HEART, rooms, MONDAY_9AM).start_time == at(0, 10)


def test_inactive_and_unequipped_rooms_are_skipped():
    rooms = rooms_with((1, [Equipment.ECG]), (2, [Equipment.MRI]), (3, [Equipment.ECG]))
    rooms[0].is_active = False
    assert find_slot(HEART, rooms, MONDAY_9AM).room_id == 3
    assert find_slot(BRAIN, rooms_with((1, [Equipment.CT])), MONDAY_9AM) is None


def test_slot_never_overlaps_existing_bookings():
    rooms = build_rooms()
    for r in rooms:
        r.bookings += [booking(r.id, at(d, 10 + (r.id % 3)), at(d, 13 + (r.id % 3))) for d in range(3)]
    for kind in SurgeryType:
        slot = find_slot(kind, rooms, MONDAY_9AM, DEFAULT_CONFIG)
        room = next(r for r in rooms if r.id == slot.room_id)
        assert not any(b.overlaps(slot.start_time, slot.end_time) for b in room.bookings)
        assert is_within_working_hours(slot.start_time, slot.end_time, WORKING_HOURS)


def test_first_gap_in_room_matches_find_slot_for_single_room():
    rooms = rooms_with((1, [Equipment.MRI, Equipment.CT]))
    rooms[0].bookings.append(booking(1, at(0, 10), at(0, 12), kind=BRAIN))
    slot = first_gap_in_room(BRAIN, rooms[0], MONDAY_9AM)
    assert slot == find_slot(BRAIN, rooms, MONDAY_9AM)
    assert (slot.start_time, slot.end_time) == (at(0, 12), at(0, 14))
