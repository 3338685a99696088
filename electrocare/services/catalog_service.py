# electrocare/services/catalog_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from electrocare.core.errors import NotFound
from electrocare.models.service_models import Service
from electrocare.schemas.service_schemas import ServiceCreate, ServiceUpdate
from electrocare.utils.activity_helpers import log_actor_activity


async def list_services(db: AsyncSession, include_inactive: bool = False):
    stmt = select(Service)
    if not include_inactive:
        stmt = stmt.where(Service.is_active == True)  # noqa: E712
    result = await db.execute(stmt.order_by(Service.name))
    return result.scalars().all()


async def get_service(db: AsyncSession, service_id: str) -> Service:
    service = await db.get(Service, service_id)
    if not service:
        raise NotFound("Service not found")
    return service


async def create_service(db: AsyncSession, data: ServiceCreate, current_user) -> Service:
    service = Service(**data.model_dump())
    db.add(service)
    await db.flush()

    await log_actor_activity(db, current_user, f"Created service '{service.name}' (ID: {service.id})")
    await db.commit()
    await db.refresh(service)
    return service


async def update_service(db: AsyncSession, service_id: str, data: ServiceUpdate, current_user) -> Service:
    service = await get_service(db, service_id)
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(service, key, value)

    await log_actor_activity(db, current_user, f"Updated service '{service.name}' (ID: {service.id})")
    await db.commit()
    await db.refresh(service)
    return service


async def delete_service(db: AsyncSession, service_id: str, current_user) -> Service:
    """Soft delete: the service disappears from listings but stays referenced."""
    service = await get_service(db, service_id)
    service.is_active = False

    await log_actor_activity(db, current_user, f"Deactivated service '{service.name}' (ID: {service.id})")
    await db.commit()
    await db.refresh(service)
    return service
