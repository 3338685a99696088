from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.schemas.dashboard_schemas import DashboardResponse
from electrocare.services.dashboard_service import get_dashboard_stats
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardResponse)
@require_role(["admin"])
async def dashboard_stats_route(db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    stats = await get_dashboard_stats(db)
    return {"message": "Dashboard statistics fetched successfully", "data": stats}
