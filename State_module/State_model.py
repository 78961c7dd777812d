"""
State reference data - landing page content and RTI facts per Indian state.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, func

from database import Base


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    languages = Column(JSON, nullable=True)
    departments = Column(JSON, nullable=True)
    highlights = Column(JSON, nullable=True)
    faqs = Column(JSON, nullable=True)  # [{"q": ..., "a": ...}]
    process_steps = Column(JSON, nullable=True)  # [{"step": 1, "title": ..., "description": ...}]
    hero = Column(JSON, nullable=True)
    rti_portal_url = Column(String(500), nullable=True)
    commission = Column(String(255), nullable=True)
    fee = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
