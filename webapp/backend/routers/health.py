import time
from datetime import datetime, timezone

from fastapi import APIRouter

from allocator import __version__
from config import settings
from schemas import HealthOut

router = APIRouter()

_STARTED = time.monotonic()


@router.get("/", response_model=HealthOut)
def check_health():
    return HealthOut(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=round(time.monotonic() - _STARTED, 3),
        environment=settings.env,
        version=__version__,
    )
