import enum
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Numeric, Enum as SAEnum
)
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class InstallationStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Installation(Base):
    __tablename__ = "installations"

    id = Column(String(64), primary_key=True, default=generate_id)
    # one installation per quotation; NULL for installations booked directly
    quotation_id = Column(String(64), ForeignKey("quotations.id"), nullable=True, unique=True)
    customer_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(100), nullable=True)
    # Set only when conversion had to substitute a fallback owner
    original_customer_id = Column(String(64), nullable=True)
    technician_id = Column(String(64), ForeignKey("technicians.id", ondelete="SET NULL"), nullable=True, index=True)
    service_id = Column(String(64), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    capacity = Column(Numeric(8, 2, asdecimal=False), nullable=True)  # kW
    location = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    status = Column(SAEnum(InstallationStatus), nullable=False, default=InstallationStatus.PENDING)
    installation_date = Column(DateTime(timezone=True), nullable=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)
    total_cost = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    progress = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
