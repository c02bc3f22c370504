#!/usr/bin/env python3
"""Seed the doctor registry with the default surgeons."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent))
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from sqlalchemy.orm import Session

from allocator.models import DoctorType, SurgeryType
from database import engine, SessionLocal, Base
from models import Doctor

DEFAULT_DOCTORS = [
    ("1", "Dr. Heart", DoctorType.HEART_SURGEON, SurgeryType.HEART_SURGERY),
    ("2", "Dr. Brain", DoctorType.BRAIN_SURGEON, SurgeryType.BRAIN_SURGERY),
]


def seed_doctors(db: Session) -> int:
    """Insert default doctors that are missing. Returns how many were added."""
    added = 0
    for doc_id, name, doctor_type, surgery_type in DEFAULT_DOCTORS:
        if db.query(Doctor).filter(Doctor.id == doc_id).first():
            continue
        db.add(Doctor(id=doc_id, name=name, doctor_type=doctor_type.value,
                      surgery_type=surgery_type.value, is_active=True))
        added += 1
    db.commit()
    return added


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        n = seed_doctors(db)
        print(f"Seeded {n} doctor(s)")
    finally:
        db.close()
