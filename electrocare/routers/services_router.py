from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.schemas.service_schemas import (
    ServiceCreate, ServiceUpdate, ServiceResponse, ServiceListResponse
)
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.catalog_service import (
    list_services, get_service, create_service, update_service, delete_service
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role

router = APIRouter(prefix="/services", tags=["Services"])


# Public catalog
@router.get("", response_model=ServiceListResponse, include_in_schema=False)
@router.get("/", response_model=ServiceListResponse)
async def list_services_route(db: AsyncSession = Depends(get_db)):
    services = await list_services(db)
    return {"message": f"{len(services)} services fetched successfully.", "data": services}


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service_route(service_id: str, db: AsyncSession = Depends(get_db)):
    service = await get_service(db, service_id)
    return {"message": "Service fetched successfully", "data": service}


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin"])
async def create_service_route(data: ServiceCreate, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    service = await create_service(db, data, _user)
    return {"message": f"Service '{service.name}' created successfully", "data": service}


@router.put("/{service_id}", response_model=ServiceResponse)
@require_role(["admin"])
async def update_service_route(
    service_id: str,
    data: ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    service = await update_service(db, service_id, data, _user)
    return {"message": "Service updated successfully", "data": service}


@router.delete("/{service_id}", response_model=MessageResponse)
@require_role(["admin"])
async def delete_service_route(service_id: str, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    service = await delete_service(db, service_id, _user)
    return {"message": f"Service '{service.name}' deactivated successfully"}
