from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_

from electrocare.core.errors import NotFound
from electrocare.models.common import utcnow
from electrocare.models.complaint_models import Complaint, ComplaintStatus, Priority
from electrocare.models.installation_models import Installation
from electrocare.models.user_models import UserRole
from electrocare.schemas.complaint_schema import ComplaintCreate, ComplaintUpdate, ComplaintOut
from electrocare.services.user_service import get_technician_for_user
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import ensure_can_modify, is_admin
from electrocare.utils.enrichment import enrich_customer_names


def stamp_resolved(record, new_status, resolved_status):
    """Set ``resolved_at`` when the status moves into resolved, and only then."""
    if new_status == resolved_status and record.status != resolved_status:
        record.resolved_at = utcnow()


# ➕ Create Complaint
async def create_complaint(db: AsyncSession, complaint_data: ComplaintCreate, _user) -> Complaint:
    customer_id = complaint_data.customer_id if is_admin(_user) and complaint_data.customer_id else _user.id

    if complaint_data.installation_id:
        installation = await db.get(Installation, complaint_data.installation_id)
        if not installation:
            raise NotFound("Installation not found")

    fields = complaint_data.model_dump(exclude={"customer_id"})
    if not fields.get("customer_name") and customer_id == _user.id:
        fields["customer_name"] = _user.full_name or None

    complaint = Complaint(customer_id=customer_id, status=ComplaintStatus.OPEN, **fields)
    db.add(complaint)
    await db.flush()

    await log_actor_activity(db, _user, f"Created complaint '{complaint.title}' (ID: {complaint.id})")
    await db.commit()
    await db.refresh(complaint)
    return complaint


# 📋 Get All Complaints (with filters)
async def get_all_complaints(
    db: AsyncSession,
    status: Optional[ComplaintStatus] = None,
    priority: Optional[Priority] = None,
    customer_id: Optional[str] = None,
    technician_id: Optional[str] = None,
    search: Optional[str] = None,
) -> List[ComplaintOut]:
    filters = []

    if status:
        filters.append(Complaint.status == status)
    if priority:
        filters.append(Complaint.priority == priority)
    if customer_id:
        filters.append(Complaint.customer_id == customer_id)
    if technician_id:
        filters.append(Complaint.assigned_technician_id == technician_id)
    if search:
        search_like = f"%{search.lower()}%"
        filters.append(
            or_(
                Complaint.title.ilike(search_like),
                Complaint.description.ilike(search_like),
            )
        )

    stmt = select(Complaint)
    if filters:
        stmt = stmt.where(and_(*filters))
    result = await db.execute(stmt.order_by(Complaint.created_at.desc()))
    return await enrich_customer_names(db, result.scalars().all(), ComplaintOut)


async def list_complaints_for(db: AsyncSession, _user, **filters) -> List[ComplaintOut]:
    if is_admin(_user):
        return await get_all_complaints(db, **filters)
    if _user.role == UserRole.TECHNICIAN:
        technician = await get_technician_for_user(db, _user.id)
        if not technician:
            return []
        return await get_all_complaints(db, technician_id=technician.id, **filters)
    return await get_all_complaints(db, customer_id=_user.id, **filters)


# 🔍 Get Single Complaint
async def get_complaint_by_id(db: AsyncSession, complaint_id: str) -> Complaint:
    complaint = await db.get(Complaint, complaint_id)
    if not complaint:
        raise NotFound("Complaint not found")
    return complaint


async def get_complaint_for(db: AsyncSession, complaint_id: str, _user) -> Complaint:
    complaint = await get_complaint_by_id(db, complaint_id)
    ensure_can_modify(_user, complaint.customer_id, allow_technician=True)
    return complaint


# ✏️ Update Complaint
async def update_complaint(db: AsyncSession, complaint_id: str, data: ComplaintUpdate, _user) -> Complaint:
    complaint = await get_complaint_by_id(db, complaint_id)
    ensure_can_modify(_user, complaint.customer_id, allow_technician=True)

    payload = data.model_dump(exclude_unset=True, exclude_none=True)
    if "status" in payload:
        stamp_resolved(complaint, payload["status"], ComplaintStatus.RESOLVED)

    for key, value in payload.items():
        setattr(complaint, key, value)

    await log_actor_activity(db, _user, f"Updated complaint #{complaint.id} by user '{_user.email}'")
    await db.commit()
    await db.refresh(complaint)
    return complaint


# 🗑️ Delete Complaint
async def delete_complaint(db: AsyncSession, complaint_id: str, _user) -> Complaint:
    complaint = await get_complaint_by_id(db, complaint_id)
    ensure_can_modify(_user, complaint.customer_id)

    await db.delete(complaint)
    await log_actor_activity(db, _user, f"Deleted complaint #{complaint.id} by user '{_user.email}'")
    await db.commit()
    return complaint
