from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.models.technician_models import TechnicianStatus
from electrocare.schemas.technician_schemas import (
    TechnicianCreate, TechnicianUpdate, TechnicianResponse, TechnicianListResponse
)
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.technician_service import (
    create_technician, list_technicians, get_technician, get_my_technician,
    update_technician, delete_technician,
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role

router = APIRouter(prefix="/technicians", tags=["Technicians"])


@router.get("", response_model=TechnicianListResponse, include_in_schema=False)
@router.get("/", response_model=TechnicianListResponse)
@require_role(["admin", "technician"])
async def list_technicians_route(
    status: Optional[TechnicianStatus] = Query(None),
    available: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    technicians = await list_technicians(db, status=status, available=available)
    return {"message": f"{len(technicians)} technicians fetched successfully.", "data": technicians}


@router.get("/me", response_model=TechnicianResponse)
@require_role(["technician"])
async def my_technician_route(db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    technician = await get_my_technician(db, _user)
    return {"message": "Technician profile fetched successfully", "data": technician}


@router.get("/{technician_id}", response_model=TechnicianResponse)
@require_role(["admin", "technician"])
async def get_technician_route(technician_id: str, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    technician = await get_technician(db, technician_id)
    return {"message": "Technician fetched successfully", "data": technician}


@router.post("", response_model=TechnicianResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=TechnicianResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin"])
async def create_technician_route(
    data: TechnicianCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    technician = await create_technician(db, data, _user)
    return {"message": f"Technician '{technician.name}' created successfully", "data": technician}


@router.put("/{technician_id}", response_model=TechnicianResponse)
@require_role(["admin"])
async def update_technician_route(
    technician_id: str,
    data: TechnicianUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    technician = await update_technician(db, technician_id, data, _user)
    return {"message": "Technician updated successfully", "data": technician}


@router.delete("/{technician_id}", response_model=MessageResponse)
@require_role(["admin"])
async def delete_technician_route(technician_id: str, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    technician = await delete_technician(db, technician_id, _user)
    return {"message": f"Technician '{technician.name}' deleted successfully"}
