from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ServiceBase(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)
    price: Optional[float] = Field(default=None, ge=0)
    base_price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[str] = None
    requirements: Optional[str] = None


class ServiceCreate(ServiceBase):
    name: str = Field(min_length=1, max_length=100)
    category: str = "installation"


class ServiceUpdate(ServiceBase):
    is_active: Optional[bool] = None


class ServiceOut(ServiceBase):
    id: str
    name: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceResponse(BaseModel):
    message: str
    data: Optional[ServiceOut] = None


class ServiceListResponse(BaseModel):
    message: str
    data: List[ServiceOut]
