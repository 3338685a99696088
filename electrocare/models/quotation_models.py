# electrocare/models/quotation_models.py
import enum
from sqlalchemy import (
    Column, String, Text, DateTime, ForeignKey, JSON, Numeric, Enum as SAEnum
)
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class QuotationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONVERTED = "converted"


# ==================================================
# QUOTATION LIFECYCLE
# ==================================================
QUOTATION_TRANSITIONS = {
    QuotationStatus.PENDING: {QuotationStatus.APPROVED, QuotationStatus.REJECTED, QuotationStatus.CONVERTED},
    QuotationStatus.APPROVED: {QuotationStatus.CONVERTED},
    QuotationStatus.REJECTED: set(),
    QuotationStatus.CONVERTED: set(),
}

CONVERTIBLE_STATUSES = {QuotationStatus.PENDING, QuotationStatus.APPROVED}


class EditRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ==================================================
# QUOTATION MODEL
# ==================================================
class Quotation(Base):
    __tablename__ = "quotations"

    id = Column(String(64), primary_key=True, default=generate_id)
    # Weak reference to users.id; guest quotations may point at nobody
    customer_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(100), nullable=True)
    status = Column(SAEnum(QuotationStatus), nullable=False, default=QuotationStatus.PENDING)

    # Contact
    customer_email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    property_address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    society = Column(String(200), nullable=True)

    # Site & system
    property_type = Column(String(50), nullable=True)
    roof_type = Column(String(50), nullable=True)
    installation_type = Column(String(50), nullable=True)
    energy_consumption = Column(Numeric(10, 2, asdecimal=False), nullable=True)  # kWh
    system_size = Column(Numeric(10, 2, asdecimal=False), nullable=True)  # kW
    solar_panel = Column(String(100), nullable=True)
    battery_type = Column(String(50), nullable=True)
    battery_brand = Column(String(100), nullable=True)
    battery_capacity = Column(String(50), nullable=True)
    inverter_brand = Column(String(100), nullable=True)
    inverter_size = Column(String(50), nullable=True)
    net_metering = Column(String(10), nullable=True)
    total_load = Column(String(50), nullable=True)
    panels_required = Column(String(20), nullable=True)
    appliances = Column(JSON, nullable=True)

    # Pricing
    estimated_cost = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=True)  # legacy total
    installation_timeline = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def can_transition_to(self, new_status: QuotationStatus) -> bool:
        if new_status == self.status:
            return True
        return new_status in QUOTATION_TRANSITIONS[self.status]

    @property
    def quoted_cost(self) -> float:
        return self.estimated_cost or self.amount or 0


class QuotationEditRequest(Base):
    __tablename__ = "quotation_edit_requests"

    id = Column(String(64), primary_key=True, default=generate_id)
    quotation_id = Column(String(64), ForeignKey("quotations.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(String(64), nullable=False, index=True)
    requested_changes = Column(Text, nullable=False)
    status = Column(SAEnum(EditRequestStatus), nullable=False, default=EditRequestStatus.PENDING)
    admin_response = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
