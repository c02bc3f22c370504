"""
Resource registry: owns the operating rooms and one lock per room.
"""

import copy
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional

from .models import Booking, OperatingRoom
from .validate import assert_room_consistent


class RoomLockedError(Exception):
    """Another transaction holds this room's lock."""

    def __init__(self, room_id: int):
        super().__init__(f"Operating room {room_id} is locked")
        self.room_id = room_id


class ResourceRegistry:
    def __init__(self, rooms: Iterable[OperatingRoom]):
        self._rooms: Dict[int, OperatingRoom] = {}
        for room in rooms:
            if room.id in self._rooms:
                raise ValueError(f"Duplicate operating room id {room.id}")
            assert_room_consistent(room)
            self._rooms[room.id] = room
        self._locks: Dict[int, threading.Lock] = {rid: threading.Lock() for rid in self._rooms}

    def rooms(self) -> List[OperatingRoom]:
        """Live room objects, by id. Callers outside the engine use snapshot()."""
        return [self._rooms[rid] for rid in sorted(self._rooms)]

    def get(self, room_id: int) -> Optional[OperatingRoom]:
        return self._rooms.get(room_id)

    def snapshot(self) -> List[OperatingRoom]:
        return copy.deepcopy(self.rooms())

    @contextmanager
    def hold(self, room_id: int) -> Iterator[OperatingRoom]:
        """
        Exclusive, non-reentrant, non-blocking access to one room.
        Raises RoomLockedError immediately if the lock is taken.
        """
        lock = self._locks[room_id]
        if not lock.acquire(blocking=False):
            raise RoomLockedError(room_id)
        try:
            yield self._rooms[room_id]
        finally:
            lock.release()

    def is_available(self, room_id: int, start: datetime, end: datetime) -> bool:
        room = self._rooms.get(room_id)
        if room is None or not room.is_active:
            return False
        return not any(b.overlaps(start, end) for b in room.active_bookings())

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        for room in self.rooms():
            for b in room.bookings:
                if b.id == booking_id:
                    return b
        return None
