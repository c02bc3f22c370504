"""
Data models for the ORAllocator engine.
Rooms, bookings and queue entries are plain dataclasses owned by one engine.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


class Equipment(str, Enum):
    MRI = "MRI"
    CT = "CT"
    ECG = "ECG"


class SurgeryType(str, Enum):
    HEART_SURGERY = "HEART_SURGERY"
    BRAIN_SURGERY = "BRAIN_SURGERY"


class DoctorType(str, Enum):
    HEART_SURGEON = "HEART_SURGEON"
    BRAIN_SURGEON = "BRAIN_SURGEON"


class BookingStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class QueueStatus(str, Enum):
    WAITING = "WAITING"
    PROCESSING = "PROCESSING"
    SCHEDULED = "SCHEDULED"
    CANCELLED = "CANCELLED"


class RejectReason(str, Enum):
    NO_ROOM_WITH_REQUIRED_EQUIPMENT = "NO_ROOM_WITH_REQUIRED_EQUIPMENT"  # permanent
    LOCK_CONFLICT = "LOCK_CONFLICT"                                      # transient
    SLOT_CONFLICT = "SLOT_CONFLICT"                                      # transient


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class DurationRule:
    """Duration override that applies when a room holds every item in `equipment`."""
    equipment: FrozenSet[Equipment]
    duration_hours: float


@dataclass(frozen=True)
class Requirement:
    """Equipment and duration contract for one surgery type."""
    surgery_type: SurgeryType
    required_equipment: FrozenSet[Equipment]   # minimal set; extra equipment is fine
    base_duration_hours: float
    doctor_type: DoctorType
    duration_rules: Tuple[DurationRule, ...] = ()

    def __post_init__(self):
        durations = [self.base_duration_hours] + [r.duration_hours for r in self.duration_rules]
        if any(d <= 0 for d in durations):
            raise ValueError(f"{self.surgery_type.value}: durations must be positive, got {durations}")

    def duration_for(self, equipment) -> float:
        """First matching rule wins; otherwise the base duration."""
        present = frozenset(equipment)
        for rule in self.duration_rules:
            if rule.equipment <= present:
                return rule.duration_hours
        return self.base_duration_hours


@dataclass
class Booking:
    requester_id: str
    surgery_type: SurgeryType
    room_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus = BookingStatus.SCHEDULED
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED

    def overlaps(self, start: datetime, end: datetime) -> bool:
        # Half-open: a booking ending at 13:00 does not block one starting at 13:00
        return start < self.end_time and end > self.start_time


@dataclass
class OperatingRoom:
    id: int
    equipment: FrozenSet[Equipment]
    is_active: bool = True
    bookings: List[Booking] = field(default_factory=list)

    def active_bookings(self) -> List[Booking]:
        return [b for b in self.bookings if b.is_active]


@dataclass
class QueueEntry:
    requester_id: str
    surgery_type: SurgeryType
    request_time: datetime
    priority: int = 1            # uniform for now; order is FIFO
    status: QueueStatus = QueueStatus.WAITING
    id: str = field(default_factory=new_id)


@dataclass(frozen=True)
class Slot:
    room_id: int
    start_time: datetime
    end_time: datetime


# ---------------------------------------------------------------------------
# Booking outcomes
# ---------------------------------------------------------------------------

@dataclass
class Scheduled:
    booking: Booking


@dataclass
class Queued:
    position: int                # 1-based, queue length at insertion
    entry: QueueEntry


@dataclass
class Rejected:
    reason: RejectReason


@dataclass
class DrainResult:
    processed: int
    scheduled: List[Booking] = field(default_factory=list)


@dataclass
class RoomStatus:
    room: OperatingRoom
    current_booking: Optional[Booking] = None
    next_available: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkingHours:
    """Daily window [start_hour, end_hour) on the given weekdays (Mon=0)."""
    start_hour: int = 10
    end_hour: int = 18
    weekdays: FrozenSet[int] = frozenset({0, 1, 2, 3, 4})

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(f"Invalid working window {self.start_hour}:00-{self.end_hour}:00")
        if not self.weekdays or not set(self.weekdays) <= set(range(7)):
            raise ValueError(f"Invalid working weekdays: {sorted(self.weekdays)}")

    @property
    def window(self) -> timedelta:
        return timedelta(hours=self.end_hour - self.start_hour)


@dataclass(frozen=True)
class AllocatorConfig:
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    horizon: timedelta = timedelta(days=7)
