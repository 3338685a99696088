from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from electrocare.core.db import get_db
from electrocare.models.complaint_models import Complaint, ComplaintStatus, Priority
from electrocare.models.user_models import User
from electrocare.schemas.complaint_schema import (
    ComplaintCreate,
    ComplaintResponse,
    ComplaintListResponse,
    ComplaintUpdate,
)
from electrocare.schemas.installation_schemas import AssignTechnicianRequest
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.assignment_service import assign_technician
from electrocare.services.complaint_service import (
    create_complaint,
    list_complaints_for,
    get_complaint_for,
    update_complaint,
    delete_complaint,
)
from electrocare.utils.get_user import get_current_user

router = APIRouter(prefix="/complaints", tags=["Complaints"])


# 🧾 Create Complaint
@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def route_create_complaint(
    payload: ComplaintCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    complaint = await create_complaint(db, payload, current_user)
    return {"message": "Complaint created successfully", "data": complaint}


# 📋 Get All Complaints (scoped to the caller)
@router.get("", response_model=ComplaintListResponse, include_in_schema=False)
@router.get("/", response_model=ComplaintListResponse)
async def route_get_all_complaints(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status: Optional[ComplaintStatus] = Query(None, description="Filter by status"),
    priority: Optional[Priority] = Query(None, description="Filter by priority"),
    search: Optional[str] = Query(None, description="Search by title or description"),
):
    complaints = await list_complaints_for(db, current_user, status=status, priority=priority, search=search)
    return {"message": f"{len(complaints)} complaints fetched successfully.", "data": complaints}


# 🔍 Get Complaint by ID
@router.get("/{complaint_id}", response_model=ComplaintResponse)
async def route_get_complaint(
    complaint_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    complaint = await get_complaint_for(db, complaint_id, current_user)
    return {"message": "Complaint fetched successfully", "data": complaint}


# ✏️ Update Complaint
@router.put("/{complaint_id}", response_model=ComplaintResponse)
async def route_update_complaint(
    complaint_id: str,
    payload: ComplaintUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    complaint = await update_complaint(db, complaint_id, payload, current_user)
    return {"message": "Complaint updated successfully", "data": complaint}


# 👷 Assign Technician
@router.put("/{complaint_id}/assign-technician", response_model=ComplaintResponse)
async def route_assign_complaint_technician(
    complaint_id: str,
    payload: AssignTechnicianRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    complaint = await assign_technician(db, Complaint, complaint_id, payload.technician_id, current_user)
    return {"message": "Technician assigned successfully", "data": complaint}


# 🗑️ Delete Complaint
@router.delete("/{complaint_id}", response_model=MessageResponse)
async def route_delete_complaint(
    complaint_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await delete_complaint(db, complaint_id, current_user)
    return {"message": "Complaint deleted successfully"}
