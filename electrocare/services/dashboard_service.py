# electrocare/services/dashboard_service.py
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from electrocare.models.common import utcnow
from electrocare.models.complaint_models import Complaint, ComplaintStatus
from electrocare.models.installation_models import Installation, InstallationStatus
from electrocare.models.technician_models import Technician, TechnicianStatus
from electrocare.models.ticket_models import Ticket, TicketStatus
from electrocare.schemas.dashboard_schemas import DashboardStats, MonthlyCount

MONTH_WINDOW = 6
OPEN_TICKET_STATUSES = (TicketStatus.OPEN, TicketStatus.IN_PROGRESS)
OPEN_COMPLAINT_STATUSES = (ComplaintStatus.OPEN, ComplaintStatus.INVESTIGATING)


def window_start(now: datetime, months: int = MONTH_WINDOW) -> datetime:
    """First instant of the month ``months - 1`` months before ``now``'s month."""
    index = now.year * 12 + (now.month - 1) - (months - 1)
    return datetime(index // 12, index % 12 + 1, 1, tzinfo=timezone.utc)


async def count_by_status(db: AsyncSession, model, enum_cls) -> Dict[str, int]:
    result = await db.execute(select(model.status, func.count()).group_by(model.status))
    counts = {member.value: 0 for member in enum_cls}
    for status, total in result.all():
        counts[getattr(status, "value", status)] = total
    return counts


async def monthly_installations(db: AsyncSession, now: datetime = None) -> List[MonthlyCount]:
    now = now or utcnow()
    start = window_start(now)
    result = await db.execute(
        select(Installation.created_at).where(Installation.created_at >= start).order_by(Installation.created_at)
    )

    buckets: "OrderedDict[tuple, int]" = OrderedDict()
    for (created_at,) in result.all():
        if created_at is None:
            continue
        key = (created_at.year, created_at.month)
        buckets[key] = buckets.get(key, 0) + 1

    return [
        MonthlyCount(month=datetime(year, month, 1).strftime("%b %Y"), count=count)
        for (year, month), count in sorted(buckets.items())
    ]


async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    installations_by_status = await count_by_status(db, Installation, InstallationStatus)
    technicians_by_status = await count_by_status(db, Technician, TechnicianStatus)
    tickets_by_status = await count_by_status(db, Ticket, TicketStatus)
    complaints_by_status = await count_by_status(db, Complaint, ComplaintStatus)

    active_technicians = (
        await db.execute(
            select(func.count(Technician.id)).where(
                Technician.status == TechnicianStatus.ACTIVE,
                Technician.is_available == True,  # noqa: E712
            )
        )
    ).scalar() or 0

    return DashboardStats(
        total_installations=sum(installations_by_status.values()),
        active_technicians=active_technicians,
        open_tickets=sum(tickets_by_status[s.value] for s in OPEN_TICKET_STATUSES),
        open_complaints=sum(complaints_by_status[s.value] for s in OPEN_COMPLAINT_STATUSES),
        installations_by_status=installations_by_status,
        technicians_by_status=technicians_by_status,
        tickets_by_status=tickets_by_status,
        complaints_by_status=complaints_by_status,
        monthly_installations=await monthly_installations(db),
    )
