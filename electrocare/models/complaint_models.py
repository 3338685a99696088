# electrocare/models/complaint_models.py
import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum as SAEnum
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class ComplaintStatus(str, enum.Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Complaint(Base):
    __tablename__ = "complaints"

    id = Column(String(64), primary_key=True, default=generate_id)
    customer_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(100), nullable=True)
    installation_id = Column(String(64), ForeignKey("installations.id"), nullable=True, index=True)
    assigned_technician_id = Column(
        String(64), ForeignKey("technicians.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(SAEnum(ComplaintStatus), nullable=False, default=ComplaintStatus.OPEN)
    priority = Column(SAEnum(Priority), nullable=False, default=Priority.MEDIUM)
    resolution = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
