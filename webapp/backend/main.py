"""FastAPI application for the operating room allocator."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from allocator import __version__
from allocator.validate import BookingInvariantError
from config import settings
from database import engine, Base, SessionLocal
from routers import doctors, export, health, operating_rooms, schedule, waiting
from seed import seed_doctors
from state import build_engine

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("allocator.api")

# Create tables and default doctors
Base.metadata.create_all(bind=engine)
_db = SessionLocal()
try:
    seed_doctors(_db)
finally:
    _db.close()

app = FastAPI(
    title="Operating Room Allocator",
    description="First-fit operating room booking with a waiting queue",
    version=__version__,
)
app.state.engine = build_engine()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins in development
    allow_credentials=False,  # Must be False when allow_origins is "*"
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if not (settings.is_production and request.url.path.startswith(f"{settings.api_prefix}/health")):
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "INVALID_REQUEST", "details": details})


@app.exception_handler(BookingInvariantError)
async def invariant_handler(request: Request, exc: BookingInvariantError):
    logger.error("Booking invariant violated: %s", exc)
    return JSONResponse(status_code=500, content={"error": "BOOKING_INVARIANT_VIOLATED"})


prefix = settings.api_prefix
app.include_router(health.router, prefix=f"{prefix}/health", tags=["health"])
app.include_router(schedule.router, prefix=f"{prefix}/schedule", tags=["schedule"])
app.include_router(operating_rooms.router, prefix=f"{prefix}/operating-rooms", tags=["operating-rooms"])
app.include_router(waiting.router, prefix=f"{prefix}/queue", tags=["queue"])
app.include_router(doctors.router, prefix=f"{prefix}/doctors", tags=["doctors"])
app.include_router(export.router, prefix=f"{prefix}/export", tags=["export"])


@app.get("/")
def root():
    return {"message": "Operating Room Allocator API", "docs": "/docs"}
