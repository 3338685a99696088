from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.schemas.quotation_schemas import (
    EditRequestCreate, EditRequestUpdate, EditRequestResponse, EditRequestListResponse
)
from electrocare.services.edit_request_service import (
    create_edit_request, list_edit_requests, respond_to_edit_request
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role

router = APIRouter(prefix="/quotation-edit-requests", tags=["Quotation Edit Requests"])


@router.post("", response_model=EditRequestResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=EditRequestResponse, status_code=status.HTTP_201_CREATED)
@require_role(["customer"])
async def create_edit_request_route(
    data: EditRequestCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    edit_request = await create_edit_request(db, data, _user)
    return {"message": "Edit request submitted", "data": edit_request}


@router.get("", response_model=EditRequestListResponse, include_in_schema=False)
@router.get("/", response_model=EditRequestListResponse)
@require_role(["admin", "customer"])
async def list_edit_requests_route(db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    requests = await list_edit_requests(db, _user)
    return {"message": f"{len(requests)} edit requests fetched successfully.", "data": requests}


@router.put("/{request_id}", response_model=EditRequestResponse)
@require_role(["admin"])
async def respond_to_edit_request_route(
    request_id: str,
    data: EditRequestUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    edit_request = await respond_to_edit_request(db, request_id, data, _user)
    return {"message": "Edit request updated", "data": edit_request}
