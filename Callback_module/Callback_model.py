"""
Callback request model - "call me back" submissions carrying just a phone number.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, func

from database import Base


class CallbackStatus(str, enum.Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CallbackRequest(Base):
    __tablename__ = "callback_requests"

    id = Column(Integer, primary_key=True, index=True)
    phone = Column(String(10), nullable=False, index=True)
    state_slug = Column(String(100), nullable=True, index=True)
    status = Column(String(20), nullable=False, default=CallbackStatus.PENDING.value,
                    server_default=CallbackStatus.PENDING.value, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
