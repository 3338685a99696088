# electrocare/services/activity_service.py
from sqlalchemy import select, desc, asc, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Tuple
from electrocare.models.activity_models import UserActivity

ALLOWED_SORT_FIELDS = {"id", "user_id", "username", "created_at"}


async def get_user_activities(
    db: AsyncSession,
    user_id: Optional[str] = None,
    username: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    order: str = "desc",
) -> Tuple[int, List[UserActivity]]:
    # Validate sort field
    if sort_by not in ALLOWED_SORT_FIELDS:
        sort_by = "created_at"

    sort_column = getattr(UserActivity, sort_by)
    sort_order = desc(sort_column) if order.lower() == "desc" else asc(sort_column)

    filters = []
    if user_id:
        filters.append(UserActivity.user_id == user_id)
    if username:
        filters.append(UserActivity.username.ilike(f"%{username}%"))

    stmt = select(UserActivity)
    count_stmt = select(func.count(UserActivity.id))
    if filters:
        stmt = stmt.where(*filters)
        count_stmt = count_stmt.where(*filters)

    total = (await db.execute(count_stmt)).scalar() or 0

    # Pagination + sorting; id breaks ties between rows written in one request
    stmt = stmt.order_by(sort_order, sort_order_for_id(order)).offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(stmt)
    return total, result.scalars().all()


def sort_order_for_id(order: str):
    return desc(UserActivity.id) if order.lower() == "desc" else asc(UserActivity.id)
