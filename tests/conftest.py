import os
from datetime import datetime

import pytest

# Before any backend module reads the settings
os.environ.setdefault("ALLOCATOR_DATABASE_URL", "sqlite://")
os.environ.setdefault("ALLOCATOR_ENV", "test")

from allocator.catalog import build_rooms
from allocator.engine import AllocationEngine
from allocator.models import Booking, Equipment, SurgeryType

MONDAY_9AM = datetime(2024, 1, 15, 9, 0)    # Monday, before opening
MONDAY_10AM = datetime(2024, 1, 15, 10, 0)  # Monday, at opening


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def at(day, hour, minute=0):
    """Datetime on 2024-01-(15 + day); day 0 is a Monday."""
    return datetime(2024, 1, 15 + day, hour, minute)


def booking(room_id, start, end, kind=SurgeryType.HEART_SURGERY, requester="seed"):
    return Booking(requester_id=requester, surgery_type=kind, room_id=room_id,
                   start_time=start, end_time=end)


def rooms_with(*profiles):
    """rooms_with((1, [Equipment.ECG]), (2, [Equipment.MRI]))"""
    return build_rooms(profiles)


@pytest.fixture
def clock():
    return FixedClock(MONDAY_9AM)


@pytest.fixture
def alloc(clock):
    return AllocationEngine(clock=clock)


@pytest.fixture
def ecg_room():
    return rooms_with((1, [Equipment.ECG]))
