from fastapi import APIRouter, Depends, HTTPException

from allocator.engine import AllocationEngine
from allocator.models import OperatingRoom
from schemas import BookingOut, RoomOut, RoomStatusOut
from state import get_engine

router = APIRouter()


def _equipment(room: OperatingRoom):
    return sorted(room.equipment, key=lambda e: e.value)


def room_out(room: OperatingRoom) -> RoomOut:
    return RoomOut(
        id=room.id,
        equipment=_equipment(room),
        is_active=room.is_active,
        bookings=[BookingOut.model_validate(b) for b in sorted(room.bookings, key=lambda b: b.start_time)],
    )


@router.get("/", response_model=list[RoomOut])
def list_operating_rooms(alloc: AllocationEngine = Depends(get_engine)):
    return [room_out(r) for r in alloc.list_rooms()]


@router.get("/{room_id}/status", response_model=RoomStatusOut)
def get_room_status(room_id: int, alloc: AllocationEngine = Depends(get_engine)):
    status = alloc.room_status(room_id)
    if status is None:
        raise HTTPException(404, "Operating room not found")
    return RoomStatusOut(
        id=status.room.id,
        equipment=_equipment(status.room),
        is_active=status.room.is_active,
        current_booking=BookingOut.model_validate(status.current_booking) if status.current_booking else None,
        next_available_time=status.next_available,
    )
