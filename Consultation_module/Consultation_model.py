"""
Consultation model - lead-capture requests from the hero section forms.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, func

from database import Base

DEFAULT_SOURCE = "hero_section"


class ConsultationStatus(str, enum.Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Consultation(Base):
    __tablename__ = "consultations"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    mobile = Column(String(10), nullable=False, index=True)
    address = Column(Text, nullable=True)
    pincode = Column(String(6), nullable=True)
    state_slug = Column(String(100), nullable=True, index=True)
    source = Column(String(50), nullable=False, default=DEFAULT_SOURCE, server_default=DEFAULT_SOURCE)
    status = Column(String(20), nullable=False, default=ConsultationStatus.PENDING.value,
                    server_default=ConsultationStatus.PENDING.value, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
