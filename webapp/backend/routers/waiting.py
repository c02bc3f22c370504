from fastapi import APIRouter, Depends, HTTPException

from allocator.engine import AllocationEngine
from schemas import QueueItemOut, QueueStatusOut
from state import get_engine

router = APIRouter()


@router.get("/", response_model=QueueStatusOut)
def get_queue(alloc: AllocationEngine = Depends(get_engine)):
    entries = alloc.queue_status()
    items = [
        QueueItemOut(
            position=i,
            id=e.id,
            requester_id=e.requester_id,
            surgery_type=e.surgery_type,
            request_time=e.request_time,
            priority=e.priority,
            status=e.status,
        )
        for i, e in enumerate(entries, 1)
    ]
    return QueueStatusOut(total_items=len(items), items=items)


@router.delete("/{entry_id}")
def cancel_queue_entry(entry_id: str, alloc: AllocationEngine = Depends(get_engine)):
    if not alloc.cancel_queue_entry(entry_id):
        raise HTTPException(404, "Queue entry not found")
    return {"ok": True, "cancelled": entry_id}
