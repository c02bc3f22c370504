"""Pydantic schemas for API."""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from allocator.models import BookingStatus, DoctorType, Equipment, QueueStatus, SurgeryType


class ScheduleRequest(BaseModel):
    doctor_id: str = Field(min_length=1)
    surgery_type: SurgeryType


class BookingOut(BaseModel):
    id: str
    requester_id: str
    surgery_type: SurgeryType
    room_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ScheduleResponse(BaseModel):
    success: bool = True
    schedule: BookingOut


class QueuedResponse(BaseModel):
    success: bool = False
    queued: bool = True
    queue_position: int
    entry_id: str


class ConflictResponse(BaseModel):
    success: bool = False
    error: str  # NO_ROOM_WITH_REQUIRED_EQUIPMENT, LOCK_CONFLICT, SLOT_CONFLICT


class DrainResponse(BaseModel):
    processed: int
    scheduled: List[BookingOut] = []


class RoomOut(BaseModel):
    id: int
    equipment: List[Equipment]
    is_active: bool
    bookings: List[BookingOut] = []


class RoomStatusOut(BaseModel):
    id: int
    equipment: List[Equipment]
    is_active: bool
    current_booking: Optional[BookingOut] = None
    next_available_time: Optional[datetime] = None


class QueueItemOut(BaseModel):
    position: int
    id: str
    requester_id: str
    surgery_type: SurgeryType
    request_time: datetime
    priority: int
    status: QueueStatus


class QueueStatusOut(BaseModel):
    total_items: int
    items: List[QueueItemOut] = []


class DoctorBase(BaseModel):
    name: str = Field(min_length=1)
    doctor_type: DoctorType
    surgery_type: SurgeryType


class DoctorCreate(DoctorBase):
    id: str = Field(min_length=1)


class DoctorOut(DoctorBase):
    id: str
    is_active: bool

    class Config:
        from_attributes = True


class HealthOut(BaseModel):
    status: str  # healthy, unhealthy
    timestamp: datetime
    uptime_seconds: float
    environment: str
    version: str
