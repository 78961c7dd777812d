"""
RTI application model - stores applications filed through the public form
or by signed-in users.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, func

from database import Base


class RTIApplicationStatus(str, enum.Enum):
    """Application statuses, advanced by admins only"""
    PENDING = "pending"  # Initial state for every new application
    SUBMITTED = "submitted"  # Filed with the public authority
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class RTIApplication(Base):
    __tablename__ = "rti_applications"

    id = Column(Integer, primary_key=True, index=True)
    # NULL for public submissions
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="RESTRICT"), nullable=False, index=True)
    state_id = Column(Integer, ForeignKey("states.id", ondelete="RESTRICT"), nullable=False, index=True)

    full_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    mobile = Column(String(10), nullable=False, index=True)
    address = Column(Text, nullable=True)
    pincode = Column(String(6), nullable=True)
    rti_query = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=RTIApplicationStatus.PENDING.value,
                    server_default=RTIApplicationStatus.PENDING.value, index=True)
    notes = Column(Text, nullable=True)

    # Payment references from the checkout flow
    payment_id = Column(String(255), nullable=True)
    order_id = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_rti_status_created", "status", "created_at"),
    )
