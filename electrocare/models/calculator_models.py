from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class CalculatorResult(Base):
    __tablename__ = "calculator_results"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    lights = Column(Integer, default=0)
    fans = Column(Integer, default=0)
    acs = Column(Integer, default=0)
    computers = Column(Integer, default=0)
    kitchen = Column(Integer, default=0)
    misc = Column(Integer, default=0)
    daily_consumption = Column(Numeric(8, 2, asdecimal=False))
    recommended_capacity = Column(Numeric(8, 2, asdecimal=False))
    estimated_cost = Column(Numeric(12, 2, asdecimal=False))
    created_at = Column(DateTime(timezone=True), default=utcnow)
