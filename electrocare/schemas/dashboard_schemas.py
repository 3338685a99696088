from pydantic import BaseModel
from typing import Dict, List


class MonthlyCount(BaseModel):
    month: str
    count: int


class DashboardStats(BaseModel):
    total_installations: int
    active_technicians: int
    open_tickets: int
    open_complaints: int
    installations_by_status: Dict[str, int]
    technicians_by_status: Dict[str, int]
    tickets_by_status: Dict[str, int]
    complaints_by_status: Dict[str, int]
    monthly_installations: List[MonthlyCount]


class DashboardResponse(BaseModel):
    message: str
    data: DashboardStats
