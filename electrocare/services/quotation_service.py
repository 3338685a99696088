# electrocare/services/quotation_service.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, func

from electrocare.core.errors import Conflict, NotFound
from electrocare.models.common import utcnow
from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation
from electrocare.models.quotation_models import Quotation, QuotationStatus
from electrocare.models.user_models import User, UserRole
from electrocare.schemas.quotation_schemas import QuotationCreate, QuotationUpdate, QuotationOut
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import ensure_can_modify, is_admin
from electrocare.utils.enrichment import enrich_customer_names

logger = logging.getLogger(__name__)


def short_ref(quotation_id: str) -> str:
    return quotation_id[:8].upper()


# --------------------------
# Helper: resolve the owning customer
# --------------------------
async def find_customer_by_name(db: AsyncSession, name: str) -> Optional[User]:
    full_name = func.trim(func.coalesce(User.first_name, "") + " " + func.coalesce(User.last_name, ""))
    result = await db.execute(
        select(User).where(
            User.role == UserRole.CUSTOMER,
            func.lower(full_name) == name.strip().lower(),
        )
    )
    return result.scalars().first()


async def resolve_customer_id(db: AsyncSession, data: QuotationCreate, current_user) -> str:
    """
    Customers always own their quotations. Admins may name the customer by
    id, else by full name; with neither the admin owns it (guest quote).
    """
    if not is_admin(current_user):
        return current_user.id
    if data.customer_id:
        return data.customer_id
    if data.customer_name:
        customer = await find_customer_by_name(db, data.customer_name)
        if customer:
            return customer.id
    return current_user.id


# --------------------------
# CREATE QUOTATION
# --------------------------
async def create_quotation(db: AsyncSession, data: QuotationCreate, current_user) -> Quotation:
    customer_id = await resolve_customer_id(db, data, current_user)

    fields = data.model_dump(exclude={"customer_id"})
    if not fields.get("customer_name") and current_user.id == customer_id:
        fields["customer_name"] = current_user.full_name or None

    quotation = Quotation(customer_id=customer_id, status=QuotationStatus.PENDING, **fields)
    db.add(quotation)
    await db.flush()

    await log_actor_activity(
        db, current_user,
        f"Created quotation {short_ref(quotation.id)} for '{quotation.customer_name or customer_id}'",
    )
    await db.commit()
    await db.refresh(quotation)
    return quotation


# --------------------------
# READ
# --------------------------
async def get_quotation(db: AsyncSession, quotation_id: str) -> Quotation:
    quotation = await db.get(Quotation, quotation_id)
    if not quotation:
        raise NotFound("Quotation not found")
    return quotation


async def get_quotation_for(db: AsyncSession, quotation_id: str, current_user) -> Quotation:
    quotation = await get_quotation(db, quotation_id)
    ensure_can_modify(current_user, quotation.customer_id)
    return quotation


async def list_quotations(
    db: AsyncSession,
    customer_id: Optional[str] = None,
    status: Optional[QuotationStatus] = None,
) -> List[QuotationOut]:
    stmt = select(Quotation)
    if customer_id:
        stmt = stmt.where(Quotation.customer_id == customer_id)
    if status:
        stmt = stmt.where(Quotation.status == status)
    result = await db.execute(stmt.order_by(Quotation.created_at.desc()))
    return await enrich_customer_names(db, result.scalars().all(), QuotationOut)


async def list_quotations_for(db: AsyncSession, current_user, status: Optional[QuotationStatus] = None):
    if is_admin(current_user):
        return await list_quotations(db, status=status)
    return await list_quotations(db, customer_id=current_user.id, status=status)


async def get_linked_installation(db: AsyncSession, quotation_id: str) -> Optional[Installation]:
    result = await db.execute(select(Installation).where(Installation.quotation_id == quotation_id))
    return result.scalars().first()


# --------------------------
# INSTALLATION RE-SYNC
# --------------------------
async def sync_installation(db: AsyncSession, quotation: Quotation, installation: Installation):
    """One-way copy of the quotation's customer, site and price onto its installation."""
    if quotation.customer_name:
        installation.customer_name = quotation.customer_name
    if quotation.property_address:
        installation.address = quotation.property_address
    if quotation.system_size:
        installation.capacity = quotation.system_size
    if quotation.quoted_cost:
        installation.total_cost = quotation.quoted_cost
    installation.notes = f"Updated from quotation {short_ref(quotation.id)} - {utcnow().isoformat()}"
    await db.flush()


async def _try_sync_installation(db: AsyncSession, quotation: Quotation):
    installation = await get_linked_installation(db, quotation.id)
    if not installation:
        return
    # attributes expire when the savepoint rolls back
    installation_id, quotation_id = installation.id, quotation.id
    try:
        async with db.begin_nested():
            await sync_installation(db, quotation, installation)
    except Exception:
        logger.warning(
            "Failed to sync installation %s from quotation %s", installation_id, quotation_id, exc_info=True
        )
        await db.refresh(installation)
        await db.refresh(quotation)


# --------------------------
# UPDATE QUOTATION
# --------------------------
def check_transition(quotation: Quotation, new_status: QuotationStatus):
    if new_status == quotation.status:
        return
    if new_status == QuotationStatus.CONVERTED:
        raise Conflict("Quotations can only be converted through the installation conversion")
    if not quotation.can_transition_to(new_status):
        raise Conflict(
            f"Cannot change quotation status from '{quotation.status.value}' to '{new_status.value}'"
        )


async def update_quotation(db: AsyncSession, quotation_id: str, data: QuotationUpdate, current_user) -> Quotation:
    quotation = await get_quotation(db, quotation_id)
    payload = data.model_dump(exclude_unset=True, exclude_none=True)

    new_status = payload.pop("status", None)
    if new_status is not None:
        check_transition(quotation, new_status)
        quotation.status = new_status

    for key, value in payload.items():
        setattr(quotation, key, value)

    await log_actor_activity(db, current_user, f"Updated quotation {short_ref(quotation.id)}")
    await db.flush()

    await _try_sync_installation(db, quotation)

    await db.commit()
    await db.refresh(quotation)
    return quotation


async def set_quotation_status(db: AsyncSession, quotation_id: str, new_status: QuotationStatus, current_user) -> Quotation:
    quotation = await get_quotation(db, quotation_id)
    check_transition(quotation, new_status)
    quotation.status = new_status

    await log_actor_activity(db, current_user, f"Quotation {short_ref(quotation.id)} marked {new_status.value}")
    await db.commit()
    await db.refresh(quotation)
    return quotation


# --------------------------
# DELETE QUOTATION
# --------------------------
async def delete_quotation(db: AsyncSession, quotation_id: str, current_user) -> Quotation:
    """Hard delete, taking the linked installations and their complaints along."""
    quotation = await get_quotation(db, quotation_id)

    linked = select(Installation.id).where(Installation.quotation_id == quotation.id)
    await db.execute(delete(Complaint).where(Complaint.installation_id.in_(linked)))
    await db.execute(delete(Installation).where(Installation.quotation_id == quotation.id))
    await db.delete(quotation)

    await log_actor_activity(db, current_user, f"Deleted quotation {short_ref(quotation.id)}")
    await db.commit()
    return quotation
