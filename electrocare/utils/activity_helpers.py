# electrocare/utils/activity_helpers.py
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from electrocare.models.activity_models import UserActivity


async def log_user_activity(
    db: AsyncSession,
    user_id: Optional[str] = None,
    username: Optional[str] = None,
    message: str = "",
    commit: bool = False,
):
    """
    Adds a user activity log to the session. The caller is responsible for the commit.
    """
    activity = UserActivity(
        user_id=user_id,
        username=username or "system",
        message=message,
    )
    db.add(activity)
    if commit:
        await db.commit()


async def log_actor_activity(db: AsyncSession, actor, message: str):
    """Shorthand used by the services: audit row attributed to the acting user."""
    await log_user_activity(
        db,
        user_id=getattr(actor, "id", None),
        username=getattr(actor, "email", None),
        message=message,
    )
