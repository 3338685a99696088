# electrocare/routers/installations_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.models.installation_models import Installation, InstallationStatus
from electrocare.schemas.installation_schemas import (
    InstallationCreate,
    InstallationUpdate,
    InstallationResponse,
    InstallationListResponse,
    ConvertQuotationRequest,
    AssignTechnicianRequest,
)
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.assignment_service import assign_technician
from electrocare.services.conversion_service import convert_quotation
from electrocare.services.installation_service import (
    create_installation,
    list_installations_for,
    get_installation_for,
    update_installation,
    delete_installation,
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role

router = APIRouter(prefix="/installations", tags=["Installations"])


# --------------------------
# LIST INSTALLATIONS
# --------------------------
@router.get("", response_model=InstallationListResponse, include_in_schema=False)
@router.get("/", response_model=InstallationListResponse)
async def list_installations_route(
    status: Optional[InstallationStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installations = await list_installations_for(db, _user, status=status)
    return {"message": f"{len(installations)} installations fetched successfully.", "data": installations}


# --------------------------
# CREATE INSTALLATION
# --------------------------
@router.post("", response_model=InstallationResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=InstallationResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin", "customer"])
async def create_installation_route(
    data: InstallationCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installation = await create_installation(db, data, _user)
    return {"message": "Installation created successfully", "data": installation}


# --------------------------
# CONVERT QUOTATION
# --------------------------
@router.post("/from-quotation", response_model=InstallationResponse, status_code=status.HTTP_201_CREATED)
async def convert_quotation_route(
    data: ConvertQuotationRequest,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installation = await convert_quotation(db, data.quotation_id, _user)
    return {"message": "Quotation converted to installation successfully", "data": installation}


# --------------------------
# GET SINGLE INSTALLATION
# --------------------------
@router.get("/{installation_id}", response_model=InstallationResponse)
async def get_installation_route(
    installation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installation = await get_installation_for(db, installation_id, _user)
    return {"message": "Installation fetched successfully", "data": installation}


# --------------------------
# UPDATE INSTALLATION
# --------------------------
@router.put("/{installation_id}", response_model=InstallationResponse)
@require_role(["admin"])
async def update_installation_route(
    installation_id: str,
    data: InstallationUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installation = await update_installation(db, installation_id, data, _user)
    return {"message": "Installation updated successfully", "data": installation}


# --------------------------
# ASSIGN TECHNICIAN
# --------------------------
@router.put("/{installation_id}/assign-technician", response_model=InstallationResponse)
async def assign_installation_technician_route(
    installation_id: str,
    data: AssignTechnicianRequest,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    installation = await assign_technician(db, Installation, installation_id, data.technician_id, _user)
    return {"message": "Technician assigned successfully", "data": installation}


# --------------------------
# DELETE INSTALLATION
# --------------------------
@router.delete("/{installation_id}", response_model=MessageResponse)
@require_role(["admin"])
async def delete_installation_route(
    installation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    await delete_installation(db, installation_id, _user)
    return {"message": "Installation deleted successfully"}
