"""SQLAlchemy models for the doctor registry."""
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime

from database import Base


class Doctor(Base):
    __tablename__ = "doctors"
    id = Column(String(50), primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    doctor_type = Column(String(30), nullable=False)   # HEART_SURGEON, BRAIN_SURGEON
    surgery_type = Column(String(30), nullable=False)  # the one surgery type this doctor performs
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
