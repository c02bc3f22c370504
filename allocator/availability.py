"""
Equipment and duration checks against the requirement catalog.
Pure functions; nothing here touches room state.
"""

from typing import Iterable, List

from .catalog import requirement_for
from .models import Equipment, OperatingRoom, SurgeryType


def equipment_satisfies(surgery_type: SurgeryType, room_equipment: Iterable[Equipment]) -> bool:
    """True iff the room holds every item of the minimal required set."""
    return requirement_for(surgery_type).required_equipment <= frozenset(room_equipment)


def duration(surgery_type: SurgeryType, room_equipment: Iterable[Equipment]) -> float:
    """Hours the surgery takes in a room with this equipment."""
    return requirement_for(surgery_type).duration_for(room_equipment)


def eligible_rooms(surgery_type: SurgeryType, rooms: Iterable[OperatingRoom]) -> List[OperatingRoom]:
    """Active rooms that can host the surgery, by room id ascending."""
    return sorted(
        (r for r in rooms if r.is_active and equipment_satisfies(surgery_type, r.equipment)),
        key=lambda r: r.id,
    )
