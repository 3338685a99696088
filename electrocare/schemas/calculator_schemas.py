from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CalculatorRequest(BaseModel):
    lights: int = Field(default=0, ge=0)
    fans: int = Field(default=0, ge=0)
    acs: int = Field(default=0, ge=0)
    computers: int = Field(default=0, ge=0)
    kitchen: int = Field(default=0, ge=0)  # Wh per day
    misc: int = Field(default=0, ge=0)  # Wh per day
    user_id: Optional[str] = None


class CalculatorOut(BaseModel):
    daily_consumption: float
    recommended_capacity: int
    estimated_cost: int


class CalculatorResultOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    lights: int
    fans: int
    acs: int
    computers: int
    kitchen: int
    misc: int
    daily_consumption: float
    recommended_capacity: float
    estimated_cost: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CalculatorHistoryResponse(BaseModel):
    message: str
    data: List[CalculatorResultOut]
