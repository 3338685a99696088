# electrocare/routers/__init__.py
from fastapi import APIRouter

from .activity_router import router as activity_router
from .auth_router import router as auth_router
from .calculator_router import router as calculator_router
from .complaint_router import router as complaint_router
from .dashboard_router import router as dashboard_router
from .edit_requests_router import router as edit_requests_router
from .installations_router import router as installations_router
from .quotations_router import router as quotations_router
from .services_router import router as services_router
from .technicians_router import router as technicians_router
from .tickets_router import router as tickets_router
from .users_router import router as users_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(users_router)
router.include_router(technicians_router)
router.include_router(services_router)
router.include_router(quotations_router)
router.include_router(edit_requests_router)
router.include_router(installations_router)
router.include_router(complaint_router)
router.include_router(tickets_router)
router.include_router(calculator_router)
router.include_router(dashboard_router)
router.include_router(activity_router)

__all__ = ["router"]
