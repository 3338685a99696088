# electrocare/services/edit_request_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from electrocare.core.errors import Conflict, Forbidden, NotFound
from electrocare.models.quotation_models import Quotation, QuotationEditRequest, EditRequestStatus
from electrocare.schemas.quotation_schemas import EditRequestCreate, EditRequestUpdate
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import is_admin


async def create_edit_request(db: AsyncSession, data: EditRequestCreate, current_user) -> QuotationEditRequest:
    quotation = await db.get(Quotation, data.quotation_id)
    if not quotation:
        raise NotFound("Quotation not found")
    if quotation.customer_id != current_user.id:
        raise Forbidden("You can only request changes to your own quotations")

    request = QuotationEditRequest(
        quotation_id=quotation.id,
        customer_id=current_user.id,
        requested_changes=data.requested_changes,
        status=EditRequestStatus.PENDING,
    )
    db.add(request)
    await db.flush()

    await log_actor_activity(db, current_user, f"Requested changes to quotation {quotation.id[:8].upper()}")
    await db.commit()
    await db.refresh(request)
    return request


async def list_edit_requests(db: AsyncSession, current_user):
    stmt = select(QuotationEditRequest)
    if not is_admin(current_user):
        stmt = stmt.where(QuotationEditRequest.customer_id == current_user.id)
    result = await db.execute(stmt.order_by(QuotationEditRequest.created_at.desc()))
    return result.scalars().all()


async def respond_to_edit_request(db: AsyncSession, request_id: str, data: EditRequestUpdate, current_user) -> QuotationEditRequest:
    request = await db.get(QuotationEditRequest, request_id)
    if not request:
        raise NotFound("Edit request not found")
    if request.status != EditRequestStatus.PENDING and data.status and data.status != request.status:
        raise Conflict(f"Edit request was already {request.status.value}")

    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(request, key, value)

    await log_actor_activity(db, current_user, f"Responded to edit request {request.id} ({request.status.value})")
    await db.commit()
    await db.refresh(request)
    return request
