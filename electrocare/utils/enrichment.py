# electrocare/utils/enrichment.py
"""
Customer display-name enrichment for list endpoints.

Some rows were stored with a raw identifier where a display name belongs.
Those names are replaced by the linked user's full name when listing;
free-text names (typed in by guests on quote requests) are never touched.
Enrichment builds response objects and never writes to the database.
"""
import re
from typing import Dict, Iterable, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from electrocare.models.user_models import User

NUMERIC_ID = re.compile(r"^[0-9]+$")
UUID_LIKE = re.compile(r"^[a-f0-9-]{8,}$")


def needs_enrichment(name: Optional[str]) -> bool:
    if not name or not name.strip():
        return True
    return bool(NUMERIC_ID.match(name) or UUID_LIKE.match(name))


def display_name(stored: Optional[str], user: Optional[User], customer_id: Optional[str]) -> Optional[str]:
    if not needs_enrichment(stored):
        return stored
    if user is not None and user.full_name:
        return user.full_name
    return stored or customer_id


async def load_users(db: AsyncSession, user_ids: Iterable[str]) -> Dict[str, User]:
    ids = {uid for uid in user_ids if uid}
    if not ids:
        return {}
    result = await db.execute(select(User).where(User.id.in_(ids)))
    return {u.id: u for u in result.scalars().all()}


async def enrich_customer_names(db: AsyncSession, rows: List, schema: Type[BaseModel]) -> List[BaseModel]:
    """Serialize ``rows`` through ``schema`` with customer names resolved."""
    pending = [r.customer_id for r in rows if needs_enrichment(r.customer_name)]
    users = await load_users(db, pending)

    enriched = []
    for row in rows:
        out = schema.model_validate(row)
        name = display_name(row.customer_name, users.get(row.customer_id), row.customer_id)
        if name != out.customer_name:
            out = out.model_copy(update={"customer_name": name})
        enriched.append(out)
    return enriched
