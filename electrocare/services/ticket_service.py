from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from electrocare.core.errors import NotFound
from electrocare.models.complaint_models import Priority
from electrocare.models.ticket_models import Ticket, TicketStatus
from electrocare.models.user_models import UserRole
from electrocare.schemas.ticket_schemas import TicketCreate, TicketUpdate, TicketOut
from electrocare.services.complaint_service import stamp_resolved
from electrocare.services.user_service import get_technician_for_user
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import ensure_can_modify, is_admin
from electrocare.utils.enrichment import enrich_customer_names


async def create_ticket(db: AsyncSession, data: TicketCreate, _user) -> Ticket:
    customer_id = data.customer_id if is_admin(_user) and data.customer_id else _user.id

    fields = data.model_dump(exclude={"customer_id"})
    if not fields.get("customer_name") and customer_id == _user.id:
        fields["customer_name"] = _user.full_name or None

    ticket = Ticket(customer_id=customer_id, status=TicketStatus.OPEN, **fields)
    db.add(ticket)
    await db.flush()

    await log_actor_activity(db, _user, f"Opened ticket '{ticket.subject}' (ID: {ticket.id})")
    await db.commit()
    await db.refresh(ticket)
    return ticket


async def list_tickets(
    db: AsyncSession,
    status: Optional[TicketStatus] = None,
    priority: Optional[Priority] = None,
    customer_id: Optional[str] = None,
    assigned_to_id: Optional[str] = None,
) -> List[TicketOut]:
    filters = []
    if status:
        filters.append(Ticket.status == status)
    if priority:
        filters.append(Ticket.priority == priority)
    if customer_id:
        filters.append(Ticket.customer_id == customer_id)
    if assigned_to_id:
        filters.append(Ticket.assigned_to_id == assigned_to_id)

    stmt = select(Ticket)
    if filters:
        stmt = stmt.where(and_(*filters))
    result = await db.execute(stmt.order_by(Ticket.created_at.desc()))
    return await enrich_customer_names(db, result.scalars().all(), TicketOut)


async def list_tickets_for(db: AsyncSession, _user, **filters) -> List[TicketOut]:
    if is_admin(_user):
        return await list_tickets(db, **filters)
    if _user.role == UserRole.TECHNICIAN:
        technician = await get_technician_for_user(db, _user.id)
        if not technician:
            return []
        return await list_tickets(db, assigned_to_id=technician.id, **filters)
    return await list_tickets(db, customer_id=_user.id, **filters)


async def get_ticket(db: AsyncSession, ticket_id: str) -> Ticket:
    ticket = await db.get(Ticket, ticket_id)
    if not ticket:
        raise NotFound("Ticket not found")
    return ticket


async def get_ticket_for(db: AsyncSession, ticket_id: str, _user) -> Ticket:
    ticket = await get_ticket(db, ticket_id)
    ensure_can_modify(_user, ticket.customer_id, allow_technician=True)
    return ticket


async def update_ticket(db: AsyncSession, ticket_id: str, data: TicketUpdate, _user) -> Ticket:
    ticket = await get_ticket(db, ticket_id)
    ensure_can_modify(_user, ticket.customer_id, allow_technician=True)

    payload = data.model_dump(exclude_unset=True, exclude_none=True)
    if "status" in payload:
        stamp_resolved(ticket, payload["status"], TicketStatus.RESOLVED)

    for key, value in payload.items():
        setattr(ticket, key, value)

    await log_actor_activity(db, _user, f"Updated ticket #{ticket.id} by user '{_user.email}'")
    await db.commit()
    await db.refresh(ticket)
    return ticket


async def delete_ticket(db: AsyncSession, ticket_id: str, _user) -> Ticket:
    ticket = await get_ticket(db, ticket_id)
    ensure_can_modify(_user, ticket.customer_id)

    await db.delete(ticket)
    await log_actor_activity(db, _user, f"Deleted ticket #{ticket.id} by user '{_user.email}'")
    await db.commit()
    return ticket
