# electrocare/utils/check_roles.py
from typing import Callable, Iterable, Optional
from functools import wraps

from electrocare.core.errors import Forbidden, Unauthenticated
from electrocare.models.user_models import User, UserRole


def _role_of(user) -> str:
    role = getattr(user, "role", None)
    return getattr(role, "value", role) or ""


def require_role(roles: Iterable[str]):
    """Decorator to validate user role; expects user to be passed by route."""
    allowed = {r.lower() for r in roles}

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, _user, **kwargs):
            if _user is None:
                raise Unauthenticated("User not authenticated")
            if _role_of(_user).lower() not in allowed:
                raise Forbidden("Permission denied")
            return await func(*args, _user=_user, **kwargs)
        return wrapper
    return decorator


def is_admin(actor: Optional[User]) -> bool:
    return actor is not None and _role_of(actor) == UserRole.ADMIN.value


def can_modify(actor: Optional[User], owner_id: Optional[str], allow_technician: bool = False) -> bool:
    """
    Owner-or-privileged predicate.

    Admins may always modify. Technicians may modify when the operation
    allows it (complaint and ticket handling). Customers may modify only
    what they own.
    """
    if actor is None:
        return False
    role = _role_of(actor)
    if role == UserRole.ADMIN.value:
        return True
    if role == UserRole.TECHNICIAN.value:
        return allow_technician
    if role == UserRole.CUSTOMER.value:
        return owner_id is not None and owner_id == actor.id
    return False


def ensure_can_modify(actor: Optional[User], owner_id: Optional[str], allow_technician: bool = False):
    if actor is None:
        raise Unauthenticated()
    if not can_modify(actor, owner_id, allow_technician):
        raise Forbidden("You do not have permission to modify this record")


def ensure_admin(actor: Optional[User]):
    if actor is None:
        raise Unauthenticated()
    if not is_admin(actor):
        raise Forbidden("Admin access required")
