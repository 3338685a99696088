# electrocare/scripts/create_admin.py
import asyncio
import logging

from sqlalchemy.future import select

from electrocare.core.config import INITIAL_ADMIN_EMAIL, INITIAL_ADMIN_PASSWORD
from electrocare.core.db import AsyncSessionLocal, init_models
from electrocare.core.logging_config import setup_logging
from electrocare.core.security import hash_password
from electrocare.models.user_models import User, UserRole, UserStatus
from electrocare.services.user_service import retire_technician

logger = logging.getLogger(__name__)


async def create_admin(session_factory=AsyncSessionLocal) -> User:
    """Create the initial admin from config; an existing account is promoted instead."""
    async with session_factory() as session:
        result = await session.execute(select(User).where(User.email == INITIAL_ADMIN_EMAIL.lower()))
        admin = result.scalars().first()
        if admin:
            if admin.role == UserRole.TECHNICIAN:
                await retire_technician(session, admin)
            admin.role = UserRole.ADMIN
            admin.status = UserStatus.ACTIVE
            logger.info("Admin user %s already exists", admin.email)
        else:
            admin = User(
                email=INITIAL_ADMIN_EMAIL.lower(),
                first_name="System",
                last_name="Administrator",
                password_hash=hash_password(INITIAL_ADMIN_PASSWORD),
                role=UserRole.ADMIN,
                status=UserStatus.ACTIVE,
            )
            session.add(admin)
            logger.info("Admin user %s created", admin.email)
        await session.commit()
        await session.refresh(admin)
        return admin


async def main():
    await init_models()
    await create_admin()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
