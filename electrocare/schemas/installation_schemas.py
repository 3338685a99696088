from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from electrocare.models.installation_models import InstallationStatus


class InstallationBase(BaseModel):
    customer_name: Optional[str] = Field(default=None, max_length=100)
    service_id: Optional[str] = None
    capacity: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    address: Optional[str] = None
    installation_date: Optional[datetime] = None
    total_cost: Optional[float] = Field(default=None, ge=0)
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class InstallationCreate(InstallationBase):
    customer_id: Optional[str] = None  # customers always own what they create
    quotation_id: Optional[str] = None
    status: InstallationStatus = InstallationStatus.PENDING


class InstallationUpdate(InstallationBase):
    status: Optional[InstallationStatus] = None
    technician_id: Optional[str] = None


class ConvertQuotationRequest(BaseModel):
    quotation_id: str = Field(min_length=1)


class AssignTechnicianRequest(BaseModel):
    technician_id: str = Field(min_length=1)


class InstallationOut(InstallationBase):
    id: str
    quotation_id: Optional[str] = None
    customer_id: str
    original_customer_id: Optional[str] = None
    technician_id: Optional[str] = None
    status: InstallationStatus
    completion_date: Optional[datetime] = None
    progress: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InstallationResponse(BaseModel):
    message: str
    data: Optional[InstallationOut] = None


class InstallationListResponse(BaseModel):
    message: str
    data: List[InstallationOut] = []
