from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from electrocare.models.complaint_models import Priority
from electrocare.models.ticket_models import TicketStatus


class TicketBase(BaseModel):
    subject: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    category: Optional[str] = Field(default=None, max_length=50)


class TicketCreate(TicketBase):
    customer_id: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, max_length=100)


class TicketUpdate(BaseModel):
    subject: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[TicketStatus] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    response: Optional[str] = None


class TicketOut(TicketBase):
    id: str
    customer_id: str
    customer_name: Optional[str] = None
    assigned_to_id: Optional[str] = None
    status: TicketStatus
    response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TicketResponse(BaseModel):
    message: str
    data: Optional[TicketOut] = None


class TicketListResponse(BaseModel):
    message: str
    data: List[TicketOut] = []
