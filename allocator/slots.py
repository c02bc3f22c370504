"""
Slot search: first eligible room (by id), first free gap, within working hours
and the scheduling horizon.

Rooms are never compared against each other for a "best" slot. The first room
in id order that yields a valid gap wins, so results are deterministic.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from .availability import duration, eligible_rooms
from .catalog import DEFAULT_CONFIG
from .models import AllocatorConfig, Booking, OperatingRoom, Slot, SurgeryType, WorkingHours

logger = logging.getLogger(__name__)


def _day_start(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def is_within_working_hours(start: datetime, end: datetime, hours: WorkingHours) -> bool:
    """Start and end both fall inside the same working day's window."""
    if start.weekday() not in hours.weekdays:
        return False
    day = _day_start(start)
    opening = day + timedelta(hours=hours.start_hour)
    closing = day + timedelta(hours=hours.end_hour)
    return opening <= start < end <= closing


def next_working_start(moment: datetime, hours: WorkingHours) -> datetime:
    """Opening time of the next working window that begins after `moment`."""
    day = _day_start(moment)
    if day.weekday() in hours.weekdays and moment < day + timedelta(hours=hours.start_hour):
        return day + timedelta(hours=hours.start_hour)
    day += timedelta(days=1)
    while day.weekday() not in hours.weekdays:
        day += timedelta(days=1)
    return day + timedelta(hours=hours.start_hour)


def first_gap_in_room(
    surgery_type: SurgeryType,
    room: OperatingRoom,
    now: datetime,
    config: AllocatorConfig = DEFAULT_CONFIG,
) -> Optional[Slot]:
    """
    Walk the room's gaps in end-time order: `now` first, then each booking's end.
    Returns None when the horizon is passed or the surgery never fits a working day.
    """
    hours = config.working_hours
    horizon_end = now + config.horizon
    length = timedelta(hours=duration(surgery_type, room.equipment))
    booked: List[Booking] = sorted(room.active_bookings(), key=lambda b: b.end_time)

    # Past bookings can end before now; never offer a slot in the past
    candidates = [now] + [max(b.end_time, now) for b in booked]
    for start in candidates:
        end = start + length
        if not is_within_working_hours(start, end, hours):
            start = next_working_start(start, hours)
            end = start + length
            if not is_within_working_hours(start, end, hours):
                return None
        if start > horizon_end:
            return None
        if any(b.overlaps(start, end) for b in booked):
            continue
        return Slot(room_id=room.id, start_time=start, end_time=end)
    return None


def find_slot(
    surgery_type: SurgeryType,
    rooms: List[OperatingRoom],
    now: datetime,
    config: AllocatorConfig = DEFAULT_CONFIG,
) -> Optional[Slot]:
    for room in eligible_rooms(surgery_type, rooms):
        slot = first_gap_in_room(surgery_type, room, now, config)
        if slot is not None:
            logger.debug("Slot for %s: room %s %s-%s", surgery_type.value, slot.room_id,
                         slot.start_time.isoformat(), slot.end_time.isoformat())
            return slot
    logger.debug("No slot for %s within %s", surgery_type.value, config.horizon)
    return None
