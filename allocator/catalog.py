# catalog.py

from typing import Dict, Iterable, List, Tuple

from .models import (
    AllocatorConfig, DoctorType, DurationRule, Equipment, OperatingRoom,
    Requirement, SurgeryType, WorkingHours,
)

# 1. SURGERY REQUIREMENTS
# Required equipment is the minimal set; duration rules may shorten the base
# duration when optional equipment is also in the room.
SURGERY_REQUIREMENTS: Dict[SurgeryType, Requirement] = {
    SurgeryType.HEART_SURGERY: Requirement(
        surgery_type=SurgeryType.HEART_SURGERY,
        required_equipment=frozenset({Equipment.ECG}),
        base_duration_hours=3,
        doctor_type=DoctorType.HEART_SURGEON,
    ),
    SurgeryType.BRAIN_SURGERY: Requirement(
        surgery_type=SurgeryType.BRAIN_SURGERY,
        required_equipment=frozenset({Equipment.MRI}),
        base_duration_hours=3,
        doctor_type=DoctorType.BRAIN_SURGEON,
        duration_rules=(
            # CT-assisted brain surgery runs an hour shorter
            DurationRule(frozenset({Equipment.MRI, Equipment.CT}), 2),
        ),
    ),
}

# 2. OPERATING ROOMS (5 rooms)
# Structure: ID, equipment profile
ROOM_PROFILES: List[Tuple[int, Tuple[Equipment, ...]]] = [
    (1, (Equipment.MRI, Equipment.CT, Equipment.ECG)),
    (2, (Equipment.CT, Equipment.MRI)),
    (3, (Equipment.CT, Equipment.MRI)),
    (4, (Equipment.MRI, Equipment.ECG)),
    (5, (Equipment.MRI, Equipment.ECG)),
]

# 3. OPERATIONAL RULES
WORKING_HOURS = WorkingHours(start_hour=10, end_hour=18, weekdays=frozenset({0, 1, 2, 3, 4}))
DEFAULT_CONFIG = AllocatorConfig(working_hours=WORKING_HOURS)


def requirement_for(surgery_type: SurgeryType) -> Requirement:
    return SURGERY_REQUIREMENTS[SurgeryType(surgery_type)]


def build_rooms(profiles: Iterable[Tuple[int, Iterable[Equipment]]] = ROOM_PROFILES) -> List[OperatingRoom]:
    """Fresh room objects so that each engine owns its own booking lists."""
    return [OperatingRoom(id=rid, equipment=frozenset(eq)) for rid, eq in profiles]
