# electrocare/services/assignment_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.errors import Conflict, NotFound
from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation, InstallationStatus
from electrocare.models.technician_models import Technician, TechnicianStatus
from electrocare.models.ticket_models import Ticket
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import ensure_admin

logger = logging.getLogger(__name__)

# target model -> (label, technician column)
ASSIGNMENT_TARGETS = {
    Installation: ("Installation", "technician_id"),
    Complaint: ("Complaint", "assigned_technician_id"),
    Ticket: ("Ticket", "assigned_to_id"),
}


async def get_assignable_technician(db: AsyncSession, technician_id: str, require_available: bool = False) -> Technician:
    technician = await db.get(Technician, technician_id)
    if not technician:
        raise NotFound("Technician not found")
    if technician.status != TechnicianStatus.ACTIVE:
        logger.warning("Refused assignment of technician %s with status %s", technician.id, technician.status.value)
        raise Conflict(
            f"Technician '{technician.name}' is {technician.status.value.replace('_', ' ')} "
            f"and cannot be assigned"
        )
    if require_available and not technician.is_available:
        logger.warning("Refused assignment of unavailable technician %s", technician.id)
        raise Conflict(f"Technician '{technician.name}' is not available")
    return technician


async def assign_technician(db: AsyncSession, model, target_id: str, technician_id: str, current_user):
    """
    Bind an active technician to an installation, complaint or ticket.
    A pending installation moves to in_progress on assignment.
    """
    ensure_admin(current_user)
    label, column = ASSIGNMENT_TARGETS[model]

    target = await db.get(model, target_id)
    if not target:
        raise NotFound(f"{label} not found")

    technician = await get_assignable_technician(db, technician_id)

    setattr(target, column, technician.id)
    if model is Installation and target.status == InstallationStatus.PENDING:
        target.status = InstallationStatus.IN_PROGRESS

    await log_actor_activity(
        db, current_user,
        f"Assigned technician '{technician.name}' to {label.lower()} {target.id}",
    )
    await db.commit()
    await db.refresh(target)
    return target
