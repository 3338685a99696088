from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class Service(Base):
    __tablename__ = "services"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), default="installation")
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    base_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    duration = Column(String(100), nullable=True)
    requirements = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
