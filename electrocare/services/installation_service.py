# electrocare/services/installation_service.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete

from electrocare.core.errors import Conflict, Forbidden, NotFound
from electrocare.models.common import utcnow
from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation, InstallationStatus
from electrocare.models.quotation_models import Quotation
from electrocare.models.service_models import Service
from electrocare.models.technician_models import Technician
from electrocare.models.user_models import UserRole
from electrocare.schemas.installation_schemas import InstallationCreate, InstallationUpdate, InstallationOut
from electrocare.services.assignment_service import get_assignable_technician
from electrocare.services.user_service import get_technician_for_user
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import is_admin
from electrocare.utils.enrichment import enrich_customer_names

logger = logging.getLogger(__name__)


async def _active_service(db: AsyncSession, service_id: str) -> Service:
    service = await db.get(Service, service_id)
    if not service or not service.is_active:
        raise Conflict("Selected service does not exist or is no longer offered")
    return service


# ➕ Create Installation
async def create_installation(db: AsyncSession, data: InstallationCreate, current_user) -> Installation:
    fields = data.model_dump(exclude={"customer_id"})
    customer_id = data.customer_id if is_admin(current_user) and data.customer_id else current_user.id

    if data.service_id:
        await _active_service(db, data.service_id)
    if data.quotation_id:
        if not await db.get(Quotation, data.quotation_id):
            raise NotFound("Quotation not found")
        linked = await db.execute(select(Installation.id).where(Installation.quotation_id == data.quotation_id))
        if linked.scalars().first():
            raise Conflict("An installation already exists for this quotation")
    if fields.get("progress") is None:
        fields["progress"] = 0
    if not fields.get("customer_name") and customer_id == current_user.id:
        fields["customer_name"] = current_user.full_name or None

    installation = Installation(customer_id=customer_id, **fields)
    if installation.status == InstallationStatus.COMPLETED:
        installation.completion_date = utcnow()
    db.add(installation)
    await db.flush()

    await log_actor_activity(db, current_user, f"Created installation {installation.id}")
    await db.commit()
    await db.refresh(installation)
    return installation


# 📋 List
async def list_installations(
    db: AsyncSession,
    customer_id: Optional[str] = None,
    technician_id: Optional[str] = None,
    quotation_id: Optional[str] = None,
    status: Optional[InstallationStatus] = None,
) -> List[InstallationOut]:
    stmt = select(Installation)
    if customer_id:
        stmt = stmt.where(Installation.customer_id == customer_id)
    if technician_id:
        stmt = stmt.where(Installation.technician_id == technician_id)
    if quotation_id:
        stmt = stmt.where(Installation.quotation_id == quotation_id)
    if status:
        stmt = stmt.where(Installation.status == status)
    result = await db.execute(stmt.order_by(Installation.created_at.desc()))
    return await enrich_customer_names(db, result.scalars().all(), InstallationOut)


async def list_installations_for(db: AsyncSession, current_user, status: Optional[InstallationStatus] = None):
    """Admins see everything, technicians their assignments, customers their own."""
    if is_admin(current_user):
        return await list_installations(db, status=status)
    if current_user.role == UserRole.TECHNICIAN:
        technician = await get_technician_for_user(db, current_user.id)
        if not technician:
            return []
        return await list_installations(db, technician_id=technician.id, status=status)
    return await list_installations(db, customer_id=current_user.id, status=status)


# 🔍 Get
async def get_installation(db: AsyncSession, installation_id: str) -> Installation:
    installation = await db.get(Installation, installation_id)
    if not installation:
        raise NotFound("Installation not found")
    return installation


async def get_installation_for(db: AsyncSession, installation_id: str, current_user) -> Installation:
    installation = await get_installation(db, installation_id)
    if is_admin(current_user) or installation.customer_id == current_user.id:
        return installation
    if current_user.role == UserRole.TECHNICIAN and installation.technician_id:
        technician = await get_technician_for_user(db, current_user.id)
        if technician and technician.id == installation.technician_id:
            return installation
    raise Forbidden("You do not have access to this installation")


# ✏️ Update
async def update_installation(db: AsyncSession, installation_id: str, data: InstallationUpdate, current_user) -> Installation:
    installation = await get_installation(db, installation_id)
    payload = data.model_dump(exclude_unset=True, exclude_none=True)

    technician_id = payload.get("technician_id")
    if technician_id and technician_id != installation.technician_id:
        if not await db.get(Technician, technician_id):
            raise Conflict("Invalid technician ID provided")
        await get_assignable_technician(db, technician_id, require_available=True)

    service_id = payload.get("service_id")
    if service_id and service_id != installation.service_id:
        await _active_service(db, service_id)

    new_status = payload.get("status")
    if (
        new_status == InstallationStatus.COMPLETED
        and installation.status != InstallationStatus.COMPLETED
        and installation.completion_date is None
    ):
        payload["completion_date"] = utcnow()

    for key, value in payload.items():
        setattr(installation, key, value)

    await log_actor_activity(db, current_user, f"Updated installation {installation.id}")
    await db.commit()
    await db.refresh(installation)
    return installation


# 🗑️ Delete
async def delete_installation(db: AsyncSession, installation_id: str, current_user) -> Installation:
    installation = await get_installation(db, installation_id)

    await db.execute(delete(Complaint).where(Complaint.installation_id == installation.id))
    await db.delete(installation)

    await log_actor_activity(db, current_user, f"Deleted installation {installation.id}")
    await db.commit()
    return installation
