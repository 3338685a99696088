# electrocare/services/user_service.py
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, delete, update, func

from electrocare.core.errors import Conflict, NotFound
from electrocare.core.security import hash_password
from electrocare.models.user_models import User, UserRole, UserStatus
from electrocare.models.technician_models import Technician
from electrocare.models.installation_models import Installation
from electrocare.models.complaint_models import Complaint
from electrocare.models.ticket_models import Ticket
from electrocare.schemas.user_schemas import UserCreate, UserUpdate, ProfileUpdate
from electrocare.schemas.technician_schemas import DEFAULT_SPECIALIZATIONS
from electrocare.utils.activity_helpers import log_actor_activity

logger = logging.getLogger(__name__)


def technician_name_for(user: User) -> str:
    if user.full_name:
        return user.full_name
    if user.email:
        return user.email.split("@")[0]
    return f"Tech {user.id}"


async def get_technician_for_user(db: AsyncSession, user_id: str) -> Optional[Technician]:
    result = await db.execute(select(Technician).where(Technician.user_id == user_id))
    return result.scalars().first()


async def provision_technician(db: AsyncSession, user: User) -> Technician:
    """Create the technician record a technician-role user must have."""
    technician = await get_technician_for_user(db, user.id)
    if technician:
        return technician
    technician = Technician(
        user_id=user.id,
        name=technician_name_for(user),
        email=user.email,
        phone=user.phone,
        specializations=list(DEFAULT_SPECIALIZATIONS),
        experience_years=1,
        certifications=[],
        is_available=True,
        completion_rate=0,
        rating=0,
    )
    db.add(technician)
    await db.flush()
    logger.info("Provisioned technician %s for user %s", technician.id, user.id)
    return technician


async def unassign_technician(db: AsyncSession, technician_id: str):
    await db.execute(
        update(Installation).where(Installation.technician_id == technician_id).values(technician_id=None)
    )
    await db.execute(
        update(Complaint)
        .where(Complaint.assigned_technician_id == technician_id)
        .values(assigned_technician_id=None)
    )
    await db.execute(update(Ticket).where(Ticket.assigned_to_id == technician_id).values(assigned_to_id=None))


async def retire_technician(db: AsyncSession, user: User):
    """Drop the technician record of a user leaving the technician role."""
    technician = await get_technician_for_user(db, user.id)
    if not technician:
        return
    await unassign_technician(db, technician.id)
    await db.delete(technician)
    await db.flush()
    logger.info("Removed technician %s of user %s", technician.id, user.id)


# CREATE USER
async def create_user(db: AsyncSession, user_data: UserCreate, current_user=None) -> User:
    existing = await db.execute(select(User).where(func.lower(User.email) == user_data.email.lower()))
    if existing.scalars().first():
        raise Conflict("User already exists with this email")

    new_user = User(
        email=user_data.email.lower(),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        phone=user_data.phone,
        address=user_data.address,
        role=user_data.role,
        password_hash=hash_password(user_data.password) if user_data.password else None,
    )
    db.add(new_user)
    await db.flush()

    if new_user.role == UserRole.TECHNICIAN:
        await provision_technician(db, new_user)

    if current_user:
        await log_actor_activity(
            db, current_user,
            f"{current_user.role.value.capitalize()} created user '{new_user.email}' with role {new_user.role.value}",
        )

    await db.commit()
    await db.refresh(new_user)
    return new_user


# LIST USERS
async def list_users(
    db: AsyncSession,
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
    limit: int = 100,
    offset: int = 0,
):
    """
    Return paginated, filtered list of users.
    Supports filtering by role and status.
    """
    query = select(User)

    filters = []
    if role:
        filters.append(User.role == role)
    if status:
        filters.append(User.status == status)

    if filters:
        query = query.where(and_(*filters))

    query = query.order_by(User.created_at.desc()).offset(offset).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


# GET USER BY ID
async def get_user_by_id(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


# UPDATE USER
async def update_user(db: AsyncSession, user_id: str, user_data: UserUpdate, current_user=None) -> User:
    """
    Partial update. A role change keeps the technician record in step with
    the role inside the same transaction.
    """
    user = await get_user_by_id(db, user_id)
    changes = []
    payload = user_data.model_dump(exclude_unset=True, exclude_none=True)

    new_email = payload.pop("email", None)
    if new_email and new_email.lower() != user.email:
        existing_check = await db.execute(
            select(User).where(func.lower(User.email) == new_email.lower(), User.id != user_id)
        )
        if existing_check.scalars().first():
            raise Conflict("User already exists with this email")
        user.email = new_email.lower()
        changes.append(f"email changed to '{user.email}'")

    password = payload.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
        changes.append("password updated")

    new_role = payload.pop("role", None)
    old_role = user.role

    for key, value in payload.items():
        setattr(user, key, value)
    if payload:
        changes.append(", ".join(sorted(payload)) + " updated")

    if new_role and new_role != old_role:
        user.role = new_role
        changes.append(f"role changed to '{new_role.value}'")
        if new_role == UserRole.TECHNICIAN:
            await provision_technician(db, user)
        elif old_role == UserRole.TECHNICIAN:
            await retire_technician(db, user)

    if current_user and changes:
        await log_actor_activity(
            db, current_user,
            f"{current_user.role.value.capitalize()} updated {user.email}: {', '.join(changes)}",
        )

    await db.commit()
    await db.refresh(user)
    return user


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> User:
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, key, value)
    await log_actor_activity(db, user, f"User '{user.email}' updated their profile")
    await db.commit()
    await db.refresh(user)
    return user


# DELETE USER
async def delete_user(db: AsyncSession, user_id: str, current_user=None) -> User:
    """
    Hard delete. A technician user takes its technician record with it and
    everything assigned to that record is un-assigned. The user's own
    installations (with their complaints), complaints and tickets go too.
    """
    user = await get_user_by_id(db, user_id)
    if current_user and current_user.id == user.id:
        raise Conflict("You cannot delete your own account")

    if user.role == UserRole.TECHNICIAN:
        await retire_technician(db, user)

    own_installations = select(Installation.id).where(Installation.customer_id == user.id)
    await db.execute(delete(Complaint).where(Complaint.installation_id.in_(own_installations)))
    await db.execute(delete(Installation).where(Installation.customer_id == user.id))
    await db.execute(delete(Complaint).where(Complaint.customer_id == user.id))
    await db.execute(delete(Ticket).where(Ticket.customer_id == user.id))

    await db.delete(user)

    if current_user:
        await log_actor_activity(
            db, current_user,
            f"{current_user.role.value.capitalize()} deleted user '{user.email}'",
        )

    await db.commit()
    return user
