# electrocare/schemas/complaint_schema.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from electrocare.models.complaint_models import ComplaintStatus, Priority


class ComplaintBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM


class ComplaintCreate(ComplaintBase):
    customer_id: Optional[str] = None  # admins may file on behalf of a customer
    customer_name: Optional[str] = Field(default=None, max_length=100)
    installation_id: Optional[str] = None


class ComplaintUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    status: Optional[ComplaintStatus] = None
    priority: Optional[Priority] = None
    description: Optional[str] = None
    resolution: Optional[str] = None


class ComplaintOut(ComplaintBase):
    id: str
    customer_id: str
    customer_name: Optional[str] = None
    installation_id: Optional[str] = None
    assigned_technician_id: Optional[str] = None
    status: ComplaintStatus
    resolution: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComplaintResponse(BaseModel):
    message: str
    data: Optional[ComplaintOut] = None


class ComplaintListResponse(BaseModel):
    message: str
    data: List[ComplaintOut] = []
