# electrocare/services/auth_service.py
from datetime import timedelta
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, func

from electrocare.core.config import SESSION_MAX_AGE_DAYS
from electrocare.core.errors import Conflict, Unauthenticated
from electrocare.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    new_session_id,
)
from electrocare.models.common import utcnow
from electrocare.models.user_models import User, UserRole, UserSession
from electrocare.schemas.auth_schemas import RegisterRequest
from electrocare.utils.activity_helpers import log_actor_activity


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalars().first()


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated("Invalid credentials")
    if not user.is_active:
        raise Unauthenticated("Account is not active")
    return user


async def open_session(db: AsyncSession, user: User) -> Tuple[str, str]:
    """
    Create a server-side session plus a legacy bearer token for the user.
    Returns ``(session_id, access_token)``; the caller commits.
    """
    session = UserSession(
        sid=new_session_id(),
        user_id=user.id,
        expires_at=utcnow() + timedelta(days=SESSION_MAX_AGE_DAYS),
    )
    db.add(session)
    access_token = create_access_token({"sub": user.id, "role": user.role.value})
    await db.flush()
    return session.sid, access_token


async def login(db: AsyncSession, email: str, password: str) -> Tuple[User, str, str]:
    user = await authenticate_user(db, email, password)
    sid, access_token = await open_session(db, user)
    await log_actor_activity(db, user, f"User '{user.email}' logged in.")
    await db.commit()
    return user, sid, access_token


async def register(db: AsyncSession, data: RegisterRequest) -> Tuple[User, str, str]:
    """Self-registration always creates a customer account and signs it in."""
    if await get_user_by_email(db, data.email):
        raise Conflict("User already exists with this email")

    user = User(
        email=data.email.lower(),
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        password_hash=hash_password(data.password),
        role=UserRole.CUSTOMER,
    )
    db.add(user)
    await db.flush()

    sid, access_token = await open_session(db, user)
    await log_actor_activity(db, user, f"User '{user.email}' registered.")
    await db.commit()
    await db.refresh(user)
    return user, sid, access_token


async def logout(db: AsyncSession, sid: Optional[str], user: Optional[User]):
    if sid:
        await db.execute(delete(UserSession).where(UserSession.sid == sid))
    if user:
        await log_actor_activity(db, user, f"User '{user.email}' logged out.")
    await db.commit()


async def purge_expired_sessions(db: AsyncSession) -> int:
    result = await db.execute(delete(UserSession).where(UserSession.expires_at <= utcnow()))
    await db.commit()
    return result.rowcount or 0
