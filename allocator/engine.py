"""
Allocation engine: booking transaction, queue replay, and the read-only views
consumed by the service layer.

One AllocationEngine instance owns all room and queue state. The search step
runs unlocked on live room data; only re-validate-and-commit runs under the
room's lock, so every commit re-checks the interval first.
"""

import copy
import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Union

from .availability import eligible_rooms, equipment_satisfies
from .catalog import DEFAULT_CONFIG, SURGERY_REQUIREMENTS, build_rooms
from .models import (
    AllocatorConfig, Booking, BookingStatus, DrainResult, OperatingRoom,
    QueueEntry, Queued, Rejected, RejectReason, RoomStatus, Scheduled, Slot,
    SurgeryType,
)
from .registry import ResourceRegistry, RoomLockedError
from .slots import find_slot, first_gap_in_room
from .validate import assert_booking_fits
from .waiting_queue import WaitingQueue

logger = logging.getLogger(__name__)

BookingOutcome = Union[Scheduled, Queued, Rejected]


class AllocationEngine:
    def __init__(
        self,
        rooms: Optional[Iterable[OperatingRoom]] = None,
        config: AllocatorConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.clock = clock
        self.registry = ResourceRegistry(build_rooms() if rooms is None else rooms)
        self.queue = WaitingQueue()

    # ------------------------------------------------------------------
    # Booking transaction
    # ------------------------------------------------------------------

    def request_booking(self, requester_id: str, surgery_type: SurgeryType) -> BookingOutcome:
        """Book now, queue if nothing fits the horizon, or reject with a reason code."""
        surgery_type = SurgeryType(surgery_type)
        outcome = self._book(requester_id, surgery_type, enqueue=True)
        if isinstance(outcome, Scheduled):
            b = outcome.booking
            logger.info("Scheduled %s for %s in room %s at %s", b.surgery_type.value,
                        requester_id, b.room_id, b.start_time.isoformat())
        elif isinstance(outcome, Queued):
            logger.info("Queued %s for %s at position %d", surgery_type.value, requester_id, outcome.position)
        else:
            logger.info("Rejected %s for %s: %s", surgery_type.value, requester_id, outcome.reason.value)
        return outcome

    book = request_booking

    def _book(self, requester_id: str, surgery_type: SurgeryType, enqueue: bool) -> Optional[BookingOutcome]:
        rooms = self.registry.rooms()
        if not eligible_rooms(surgery_type, rooms):
            return Rejected(RejectReason.NO_ROOM_WITH_REQUIRED_EQUIPMENT)

        now = self.clock()
        slot = find_slot(surgery_type, rooms, now, self.config)
        if slot is None:
            if not enqueue:
                return None
            entry = QueueEntry(requester_id=requester_id, surgery_type=surgery_type, request_time=now)
            return Queued(position=self.queue.enqueue(entry), entry=entry)
        return self._commit(requester_id, surgery_type, slot, now)

    def _commit(self, requester_id: str, surgery_type: SurgeryType, slot: Slot, now: datetime) -> BookingOutcome:
        try:
            with self.registry.hold(slot.room_id) as room:
                # The search ran unlocked; the room may have changed since
                if not self.registry.is_available(slot.room_id, slot.start_time, slot.end_time):
                    return Rejected(RejectReason.SLOT_CONFLICT)
                booking = Booking(
                    requester_id=requester_id,
                    surgery_type=surgery_type,
                    room_id=slot.room_id,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    created_at=now,
                    updated_at=now,
                )
                # A failed check must leave the room untouched
                assert_booking_fits(room, booking)
                room.bookings.append(booking)
        except RoomLockedError:
            return Rejected(RejectReason.LOCK_CONFLICT)
        return Scheduled(booking)

    # ------------------------------------------------------------------
    # Waiting queue
    # ------------------------------------------------------------------

    def drain_queue(self) -> DrainResult:
        """
        One left-to-right pass over the queue. Each entry gets a single attempt;
        failures keep their place and the pass moves on.
        """
        scheduled: List[Booking] = []
        for entry in self.queue.snapshot():
            if not self.queue.claim(entry):
                continue
            outcome = None
            try:
                outcome = self._book(entry.requester_id, entry.surgery_type, enqueue=False)
            finally:
                if isinstance(outcome, Scheduled):
                    self.queue.complete(entry)
                    scheduled.append(outcome.booking)
                else:
                    self.queue.release(entry)
        if scheduled:
            logger.info("Queue drain scheduled %d request(s); %d still waiting", len(scheduled), len(self.queue))
        return DrainResult(processed=len(scheduled), scheduled=scheduled)

    process_queue = drain_queue

    def queue_status(self) -> List[QueueEntry]:
        """Copies in queue order; status changes go through the queue only."""
        return [copy.copy(e) for e in self.queue.snapshot()]

    def cancel_queue_entry(self, entry_id: str) -> bool:
        return self.queue.cancel(entry_id) is not None

    # ------------------------------------------------------------------
    # Bookings and rooms
    # ------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        booking = self.registry.find_booking(booking_id)
        return copy.copy(booking) if booking else None

    def cancel_booking(self, booking_id: str) -> Optional[Booking]:
        """
        Free a booking's interval. Raises RoomLockedError if the room is mid-commit.
        Returns None for unknown ids.
        """
        booking = self.registry.find_booking(booking_id)
        if booking is None:
            return None
        with self.registry.hold(booking.room_id):
            if booking.status != BookingStatus.CANCELLED:
                booking.status = BookingStatus.CANCELLED
                booking.updated_at = self.clock()
                logger.info("Cancelled booking %s in room %s", booking.id, booking.room_id)
        return copy.copy(booking)

    def list_rooms(self) -> List[OperatingRoom]:
        return self.registry.snapshot()

    def room_status(self, room_id: int) -> Optional[RoomStatus]:
        """Booking running now (if any) and the earliest start any hosted surgery could get."""
        room = self.registry.get(room_id)
        if room is None:
            return None
        room = copy.deepcopy(room)
        now = self.clock()
        current = next((b for b in room.active_bookings() if b.start_time <= now < b.end_time), None)
        next_available = None
        if room.is_active:
            starts = [
                slot.start_time
                for kind in SURGERY_REQUIREMENTS
                if equipment_satisfies(kind, room.equipment)
                for slot in [first_gap_in_room(kind, room, now, self.config)]
                if slot is not None
            ]
            next_available = min(starts) if starts else None
        return RoomStatus(room=room, current_booking=current, next_available=next_available)
