import enum
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Numeric, Enum as SAEnum
)
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class TechnicianStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class Technician(Base):
    __tablename__ = "technicians"

    id = Column(String(64), primary_key=True, default=generate_id)
    # Weak reference: a technician survives the deletion of its user
    user_id = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    status = Column(SAEnum(TechnicianStatus), nullable=False, default=TechnicianStatus.ACTIVE)
    profile_image = Column(Text, nullable=True)
    specializations = Column(JSON, nullable=False, default=list)
    experience_years = Column(Integer, nullable=True)
    certifications = Column(JSON, nullable=False, default=list)
    is_available = Column(Boolean, nullable=False, default=True)
    completion_rate = Column(Numeric(5, 2, asdecimal=False), default=0)
    rating = Column(Numeric(3, 2, asdecimal=False), default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
