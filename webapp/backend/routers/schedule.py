from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from allocator.engine import AllocationEngine
from allocator.models import Queued, RejectReason, Scheduled
from allocator.registry import RoomLockedError
from database import get_db
from routers.doctors import can_perform_surgery
from schemas import (
    BookingOut, ConflictResponse, DrainResponse, QueuedResponse,
    ScheduleRequest, ScheduleResponse,
)
from state import get_engine

router = APIRouter()


def _drain_out(result) -> DrainResponse:
    return DrainResponse(
        processed=result.processed,
        scheduled=[BookingOut.model_validate(b) for b in result.scheduled],
    )


@router.post(
    "/request",
    status_code=201,
    response_model=ScheduleResponse,
    responses={202: {"model": QueuedResponse}, 409: {"model": ConflictResponse}},
)
def request_schedule(
    data: ScheduleRequest,
    db: Session = Depends(get_db),
    alloc: AllocationEngine = Depends(get_engine),
):
    """Book the first free slot, queue the request, or report a conflict."""
    if not can_perform_surgery(db, data.doctor_id, data.surgery_type):
        raise HTTPException(400, "DOCTOR_CANNOT_PERFORM_SURGERY")

    # Backlog goes first so queued requests keep their arrival order
    alloc.drain_queue()
    outcome = alloc.request_booking(data.doctor_id, data.surgery_type)

    if isinstance(outcome, Scheduled):
        body = ScheduleResponse(schedule=BookingOut.model_validate(outcome.booking))
        return JSONResponse(status_code=201, content=body.model_dump(mode="json"))
    if isinstance(outcome, Queued):
        body = QueuedResponse(queue_position=outcome.position, entry_id=outcome.entry.id)
        return JSONResponse(status_code=202, content=body.model_dump(mode="json"))
    body = ConflictResponse(error=outcome.reason.value)
    return JSONResponse(status_code=409, content=body.model_dump(mode="json"))


@router.post("/drain", response_model=DrainResponse)
def drain_queue(alloc: AllocationEngine = Depends(get_engine)):
    return _drain_out(alloc.drain_queue())


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: str, alloc: AllocationEngine = Depends(get_engine)):
    b = alloc.get_booking(booking_id)
    if not b:
        raise HTTPException(404, "Booking not found")
    return BookingOut.model_validate(b)


@router.delete("/{booking_id}")
def cancel_booking(booking_id: str, alloc: AllocationEngine = Depends(get_engine)):
    """Cancel a booking, then replay the queue against the freed interval."""
    try:
        b = alloc.cancel_booking(booking_id)
    except RoomLockedError:
        body = ConflictResponse(error=RejectReason.LOCK_CONFLICT.value)
        return JSONResponse(status_code=409, content=body.model_dump(mode="json"))
    if not b:
        raise HTTPException(404, "Booking not found")
    drained = alloc.drain_queue()
    return {
        "ok": True,
        "booking": BookingOut.model_validate(b).model_dump(mode="json"),
        "drained": _drain_out(drained).model_dump(mode="json"),
    }
