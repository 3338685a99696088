# electrocare/services/conversion_service.py
"""
Quotation to installation conversion.

Conversion is the one multi-row write in the system: the installation,
the quotation status flip and the audit rows are committed together or
not at all. A quotation is converted at most once.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from electrocare.core.errors import Conflict, NotFound
from electrocare.models.installation_models import Installation, InstallationStatus
from electrocare.models.quotation_models import Quotation, QuotationStatus, CONVERTIBLE_STATUSES
from electrocare.models.user_models import User
from electrocare.services.quotation_service import short_ref
from electrocare.utils.activity_helpers import log_actor_activity
from electrocare.utils.check_roles import ensure_admin

logger = logging.getLogger(__name__)

ALREADY_CONVERTED = "An installation already exists for this quotation"
DEFAULT_CUSTOMER_NAME = "Unknown Customer"
DEFAULT_ADDRESS = "Address not specified"


def installation_from_quotation(quotation: Quotation, customer_id: str) -> Installation:
    return Installation(
        quotation_id=quotation.id,
        customer_id=customer_id,
        customer_name=quotation.customer_name or DEFAULT_CUSTOMER_NAME,
        capacity=quotation.system_size or 0,
        total_cost=quotation.quoted_cost,
        address=quotation.property_address or DEFAULT_ADDRESS,
        location=quotation.city,
        status=InstallationStatus.PENDING,
        progress=0,
        notes=(
            f"Auto-created from quotation {short_ref(quotation.id)} - "
            f"{quotation.customer_name or 'Unknown'}"
        ),
    )


async def convert_quotation(db: AsyncSession, quotation_id: str, current_user) -> Installation:
    ensure_admin(current_user)

    quotation = await db.get(Quotation, quotation_id)
    if not quotation:
        raise NotFound("Quotation not found")

    existing = await db.execute(select(Installation.id).where(Installation.quotation_id == quotation.id))
    if existing.scalars().first():
        raise Conflict(ALREADY_CONVERTED)

    if quotation.status not in CONVERTIBLE_STATUSES:
        raise Conflict(
            f"Only pending or approved quotations can be converted (current status: {quotation.status.value})"
        )

    try:
        customer_id = quotation.customer_id
        original_customer_id = None
        if not customer_id or not await db.get(User, customer_id):
            original_customer_id = customer_id
            customer_id = current_user.id
            logger.warning(
                "Quotation %s references unknown customer %r; installation assigned to admin %s",
                quotation.id, original_customer_id, current_user.id,
            )
            await log_actor_activity(
                db, current_user,
                f"Quotation {short_ref(quotation.id)}: customer '{original_customer_id}' not found, "
                f"installation owned by {current_user.email} instead",
            )

        installation = installation_from_quotation(quotation, customer_id)
        installation.original_customer_id = original_customer_id
        db.add(installation)

        quotation.status = QuotationStatus.CONVERTED
        await db.flush()

        await log_actor_activity(
            db, current_user,
            f"Converted quotation {short_ref(quotation.id)} into installation {installation.id}",
        )
        await db.commit()
    except IntegrityError:
        # a concurrent conversion of the same quotation committed first
        await db.rollback()
        logger.warning("Quotation %s was converted concurrently", quotation_id)
        raise Conflict(ALREADY_CONVERTED)
    except Exception:
        await db.rollback()
        logger.exception("Conversion of quotation %s failed", quotation_id)
        raise

    await db.refresh(installation)
    return installation
