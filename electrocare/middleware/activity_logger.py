# electrocare/middleware/activity_logger.py
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from electrocare.utils.activity_helpers import log_user_activity
from electrocare.core.db import AsyncSessionLocal

logger = logging.getLogger(__name__)

LOGGED_METHODS = {"POST", "PUT", "DELETE"}


class ActivityLoggerMiddleware(BaseHTTPMiddleware):
    """Records a generic activity row for every successful authenticated write."""

    async def dispatch(self, request: Request, call_next):
        # Call actual endpoint
        response = await call_next(request)

        # The identity dependency leaves the resolved user on request.state
        user = getattr(request.state, "user", None)
        if user is None or request.method not in LOGGED_METHODS or response.status_code >= 400:
            return response

        message = f"Performed {request.method} on {request.url.path}"
        try:
            async with AsyncSessionLocal() as db:
                await log_user_activity(db, user_id=user.id, username=user.email, message=message, commit=True)
        except Exception:
            logger.exception("Failed to log activity for %s %s", request.method, request.url.path)

        return response
