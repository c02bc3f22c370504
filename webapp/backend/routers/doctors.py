from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from allocator.catalog import requirement_for
from allocator.models import SurgeryType
from database import get_db
from models import Doctor
from schemas import DoctorCreate, DoctorOut

router = APIRouter()


def can_perform_surgery(db: Session, doctor_id: str, surgery_type: SurgeryType) -> bool:
    """Doctor exists, is active, and performs exactly this surgery type."""
    d = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    if not d or not d.is_active:
        return False
    return d.surgery_type == SurgeryType(surgery_type).value


@router.get("/", response_model=list[DoctorOut])
def list_doctors(active_only: bool = True, db: Session = Depends(get_db)):
    q = db.query(Doctor)
    if active_only:
        q = q.filter(Doctor.is_active.is_(True))
    return [DoctorOut.model_validate(d) for d in q.order_by(Doctor.id).all()]


@router.get("/{doctor_id}", response_model=DoctorOut)
def get_doctor(doctor_id: str, db: Session = Depends(get_db)):
    d = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    if not d:
        raise HTTPException(404, "Doctor not found")
    return DoctorOut.model_validate(d)


@router.post("/", response_model=DoctorOut, status_code=201)
def create_doctor(data: DoctorCreate, db: Session = Depends(get_db)):
    if db.query(Doctor).filter(Doctor.id == data.id).first():
        raise HTTPException(400, f"Doctor {data.id} already exists")
    expected = requirement_for(data.surgery_type).doctor_type
    if data.doctor_type != expected:
        raise HTTPException(400, f"{data.surgery_type.value} requires a {expected.value}")
    d = Doctor(
        id=data.id,
        name=data.name,
        doctor_type=data.doctor_type.value,
        surgery_type=data.surgery_type.value,
        is_active=True,
    )
    db.add(d)
    db.commit()
    db.refresh(d)
    return DoctorOut.model_validate(d)


@router.delete("/{doctor_id}")
def deactivate_doctor(doctor_id: str, db: Session = Depends(get_db)):
    """Deactivate rather than delete; existing bookings keep their requester id."""
    d = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    if not d:
        raise HTTPException(404, "Doctor not found")
    d.is_active = False
    db.commit()
    return {"ok": True, "deactivated": d.id}
