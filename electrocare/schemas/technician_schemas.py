from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from datetime import datetime

from electrocare.models.technician_models import TechnicianStatus

DEFAULT_SPECIALIZATIONS = ["General Installation"]


def _as_list(value):
    """Accept a list, a single string, or a comma-separated string."""
    if value is None:
        return value
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


class TechnicianCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None
    status: TechnicianStatus = TechnicianStatus.ACTIVE
    specializations: Optional[Union[List[str], str]] = None
    certifications: Optional[Union[List[str], str]] = None
    experience_years: int = Field(default=0, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    completion_rate: float = Field(default=0, ge=0, le=100)
    profile_image: Optional[str] = None

    @field_validator("specializations", "certifications")
    def split_lists(cls, value):
        return _as_list(value)


class TechnicianUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[TechnicianStatus] = None
    specializations: Optional[Union[List[str], str]] = None
    certifications: Optional[Union[List[str], str]] = None
    experience_years: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    completion_rate: Optional[float] = Field(default=None, ge=0, le=100)
    is_available: Optional[bool] = None
    profile_image: Optional[str] = None

    @field_validator("specializations", "certifications")
    def split_lists(cls, value):
        return _as_list(value)


class TechnicianOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: TechnicianStatus
    specializations: List[str] = []
    certifications: List[str] = []
    experience_years: Optional[int] = None
    is_available: bool
    rating: Optional[float] = None
    completion_rate: Optional[float] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TechnicianResponse(BaseModel):
    message: str
    data: Optional[TechnicianOut] = None


class TechnicianListResponse(BaseModel):
    message: str
    data: List[TechnicianOut]
