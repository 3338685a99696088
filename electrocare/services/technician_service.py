# electrocare/services/technician_service.py
import logging
import secrets
import time
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from electrocare.core.errors import Conflict, NotFound
from electrocare.models.technician_models import Technician, TechnicianStatus
from electrocare.models.user_models import User, UserRole
from electrocare.schemas.technician_schemas import (
    TechnicianCreate,
    TechnicianUpdate,
    DEFAULT_SPECIALIZATIONS,
)
from electrocare.services.user_service import get_technician_for_user, unassign_technician
from electrocare.utils.activity_helpers import log_actor_activity

logger = logging.getLogger(__name__)

PLACEHOLDER_EMAIL_DOMAIN = "solartech.local"


def placeholder_email(name: str) -> str:
    slug = ".".join(name.lower().split()) or "technician"
    return f"{slug}.{int(time.time())}.{secrets.token_hex(3)}@{PLACEHOLDER_EMAIL_DOMAIN}"


def split_name(name: str):
    parts = name.strip().split()
    if not parts:
        return None, None
    return parts[0], " ".join(parts[1:]) or None


async def _backing_user(db: AsyncSession, data: TechnicianCreate) -> User:
    """
    Find or create the user a new technician hangs off.

    An existing user with the given email is promoted to the technician
    role; otherwise a user is created, with a placeholder email when none
    was given.
    """
    if data.email:
        result = await db.execute(select(User).where(func.lower(User.email) == data.email.lower()))
        user = result.scalars().first()
        if user:
            if await get_technician_for_user(db, user.id):
                raise Conflict(f"A technician profile already exists for {user.email}")
            user.role = UserRole.TECHNICIAN
            return user

    first_name, last_name = split_name(data.name)
    user = User(
        email=(data.email or placeholder_email(data.name)).lower(),
        first_name=first_name,
        last_name=last_name,
        phone=data.phone,
        role=UserRole.TECHNICIAN,
    )
    db.add(user)
    await db.flush()
    return user


async def create_technician(db: AsyncSession, data: TechnicianCreate, current_user) -> Technician:
    user = await _backing_user(db, data)

    technician = Technician(
        user_id=user.id,
        name=data.name,
        email=user.email,
        phone=data.phone,
        status=data.status,
        specializations=data.specializations or list(DEFAULT_SPECIALIZATIONS),
        certifications=data.certifications or [],
        experience_years=data.experience_years,
        rating=data.rating,
        completion_rate=data.completion_rate,
        profile_image=data.profile_image,
        is_available=True,
    )
    db.add(technician)
    await db.flush()

    await log_actor_activity(db, current_user, f"Created technician '{technician.name}' (ID: {technician.id})")
    await db.commit()
    await db.refresh(technician)
    return technician


async def list_technicians(db: AsyncSession, status: Optional[TechnicianStatus] = None, available: Optional[bool] = None):
    stmt = select(Technician)
    if status:
        stmt = stmt.where(Technician.status == status)
    if available is not None:
        stmt = stmt.where(Technician.is_available == available)
    stmt = stmt.order_by(Technician.name)
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_technician(db: AsyncSession, technician_id: str) -> Technician:
    technician = await db.get(Technician, technician_id)
    if not technician:
        raise NotFound("Technician not found")
    return technician


async def get_my_technician(db: AsyncSession, user: User) -> Technician:
    technician = await get_technician_for_user(db, user.id)
    if not technician:
        raise NotFound("Technician profile not found")
    return technician


async def update_technician(db: AsyncSession, technician_id: str, data: TechnicianUpdate, current_user) -> Technician:
    technician = await get_technician(db, technician_id)

    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(technician, key, value)

    await log_actor_activity(db, current_user, f"Updated technician '{technician.name}' (ID: {technician.id})")
    await db.commit()
    await db.refresh(technician)
    return technician


async def delete_technician(db: AsyncSession, technician_id: str, current_user) -> Technician:
    """
    Remove a technician record. The backing user survives and drops back
    to the customer role; assigned work is un-assigned.
    """
    technician = await get_technician(db, technician_id)

    if technician.user_id:
        user = await db.get(User, technician.user_id)
        if user and user.role == UserRole.TECHNICIAN:
            user.role = UserRole.CUSTOMER
            logger.info("User %s demoted to customer after technician %s was deleted", user.id, technician.id)

    await unassign_technician(db, technician.id)
    await db.delete(technician)

    await log_actor_activity(db, current_user, f"Deleted technician '{technician.name}' (ID: {technician.id})")
    await db.commit()
    return technician
