"""Export room bookings to Excel."""
import io
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from allocator.engine import AllocationEngine
from allocator.write_schedule import write_bookings
from state import get_engine

router = APIRouter()


@router.get("/excel")
def export_excel(include_cancelled: bool = True, alloc: AllocationEngine = Depends(get_engine)):
    """BOOKINGS and ROOMS sheets for the current engine state."""
    buf = io.BytesIO()
    write_bookings(alloc.list_rooms(), buf, include_cancelled=include_cancelled)
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=or_bookings.xlsx"},
    )
