# electrocare/schemas/quotation_schemas.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime

from electrocare.models.quotation_models import QuotationStatus, EditRequestStatus


# --------------------------
# Quotation Schemas
# --------------------------
class QuotationFields(BaseModel):
    customer_name: Optional[str] = Field(default=None, max_length=100)
    customer_email: Optional[str] = None
    phone: Optional[str] = None
    property_address: Optional[str] = None
    city: Optional[str] = None
    society: Optional[str] = None
    property_type: Optional[str] = None
    roof_type: Optional[str] = None
    installation_type: Optional[str] = None
    energy_consumption: Optional[float] = Field(default=None, ge=0)
    system_size: Optional[float] = Field(default=None, ge=0)
    solar_panel: Optional[str] = None
    battery_type: Optional[str] = None
    battery_brand: Optional[str] = None
    battery_capacity: Optional[str] = None
    inverter_brand: Optional[str] = None
    inverter_size: Optional[str] = None
    net_metering: Optional[str] = None
    total_load: Optional[str] = None
    panels_required: Optional[str] = None
    appliances: Optional[Any] = None
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    amount: Optional[float] = Field(default=None, ge=0)
    installation_timeline: Optional[str] = None
    notes: Optional[str] = None


class QuotationCreate(QuotationFields):
    customer_id: Optional[str] = None  # ignored for customers


class QuotationUpdate(QuotationFields):
    status: Optional[QuotationStatus] = None


class QuotationOut(QuotationFields):
    id: str
    customer_id: str
    status: QuotationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuotationResponse(BaseModel):
    message: str
    data: Optional[QuotationOut] = None


class QuotationListResponse(BaseModel):
    message: str
    data: List[QuotationOut] = []


# --------------------------
# Edit Request Schemas
# --------------------------
class EditRequestCreate(BaseModel):
    quotation_id: str
    requested_changes: str = Field(min_length=1)


class EditRequestUpdate(BaseModel):
    status: Optional[EditRequestStatus] = None
    admin_response: Optional[str] = None


class EditRequestOut(BaseModel):
    id: str
    quotation_id: str
    customer_id: str
    requested_changes: str
    status: EditRequestStatus
    admin_response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EditRequestResponse(BaseModel):
    message: str
    data: Optional[EditRequestOut] = None


class EditRequestListResponse(BaseModel):
    message: str
    data: List[EditRequestOut] = []
