# electrocare/routers/quotations_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.models.quotation_models import QuotationStatus
from electrocare.schemas.quotation_schemas import (
    QuotationResponse,
    QuotationListResponse,
    QuotationCreate,
    QuotationUpdate,
)
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.quotation_service import (
    create_quotation,
    get_quotation_for,
    list_quotations,
    list_quotations_for,
    update_quotation,
    set_quotation_status,
    delete_quotation,
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role, ensure_can_modify

router = APIRouter(prefix="/quotations", tags=["Quotations"])


# --------------------------
# CREATE QUOTATION
# --------------------------
@router.post("", response_model=QuotationResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=QuotationResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin", "customer"])
async def create_quotation_route(
    data: QuotationCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotation = await create_quotation(db, data, _user)
    return {"message": "Quotation created successfully", "data": quotation}


# --------------------------
# LIST QUOTATIONS
# --------------------------
@router.get("", response_model=QuotationListResponse, include_in_schema=False)
@router.get("/", response_model=QuotationListResponse)
@require_role(["admin", "customer"])
async def list_quotations_route(
    status: Optional[QuotationStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotations = await list_quotations_for(db, _user, status=status)
    return {"message": f"{len(quotations)} quotations fetched successfully.", "data": quotations}


# --------------------------
# GET QUOTATIONS BY CUSTOMER ID
# --------------------------
@router.get("/customer/{customer_id}", response_model=QuotationListResponse)
async def get_quotations_by_customer_route(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    ensure_can_modify(_user, customer_id)
    quotations = await list_quotations(db, customer_id=customer_id)
    return {"message": f"{len(quotations)} quotations fetched successfully.", "data": quotations}


# --------------------------
# GET SINGLE QUOTATION BY ID
# --------------------------
@router.get("/{quotation_id}", response_model=QuotationResponse)
async def get_quotation_route(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotation = await get_quotation_for(db, quotation_id, _user)
    return {"message": "Quotation fetched successfully", "data": quotation}


# --------------------------
# UPDATE QUOTATION
# --------------------------
@router.put("/{quotation_id}", response_model=QuotationResponse)
@require_role(["admin"])
async def update_quotation_route(
    quotation_id: str,
    data: QuotationUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotation = await update_quotation(db, quotation_id, data, _user)
    return {"message": "Quotation updated successfully", "data": quotation}


# --------------------------
# APPROVE / REJECT
# --------------------------
@router.post("/{quotation_id}/approve", response_model=QuotationResponse)
@require_role(["admin"])
async def approve_quotation_route(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotation = await set_quotation_status(db, quotation_id, QuotationStatus.APPROVED, _user)
    return {"message": "Quotation approved", "data": quotation}


@router.post("/{quotation_id}/reject", response_model=QuotationResponse)
@require_role(["admin"])
async def reject_quotation_route(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    quotation = await set_quotation_status(db, quotation_id, QuotationStatus.REJECTED, _user)
    return {"message": "Quotation rejected", "data": quotation}


# --------------------------
# DELETE QUOTATION
# --------------------------
@router.delete("/{quotation_id}", response_model=MessageResponse)
@require_role(["admin"])
async def delete_quotation_route(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    await delete_quotation(db, quotation_id, _user)
    return {"message": "Quotation deleted successfully"}
