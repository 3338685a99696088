import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum as SAEnum
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow
from electrocare.models.complaint_models import Priority


class TicketStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(64), primary_key=True, default=generate_id)
    customer_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(100), nullable=True)
    assigned_to_id = Column(String(64), ForeignKey("technicians.id", ondelete="SET NULL"), nullable=True, index=True)
    subject = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(SAEnum(TicketStatus), nullable=False, default=TicketStatus.OPEN)
    priority = Column(SAEnum(Priority), nullable=False, default=Priority.MEDIUM)
    category = Column(String(50), nullable=True)
    response = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
