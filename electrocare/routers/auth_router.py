# electrocare/routers/auth_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.config import SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SESSION_MAX_AGE_DAYS
from electrocare.core.db import get_db
from electrocare.models.user_models import User
from electrocare.schemas.auth_schemas import LoginRequest, RegisterRequest, AuthResponse
from electrocare.schemas.user_schemas import MessageResponse, UserResponse
from electrocare.services import auth_service
from electrocare.utils.get_user import get_current_user, get_optional_user

router = APIRouter(prefix="/local-db-auth", tags=["Auth"])


def set_session_cookie(response: Response, sid: str):
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=sid,
        max_age=SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )


# --------------------------
# LOGIN
# --------------------------
@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_200_OK)
async def login(data: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """Check credentials, open a server-side session and hand back a bearer token too."""
    user, sid, access_token = await auth_service.login(db, data.email, data.password)
    set_session_cookie(response, sid)
    return {"message": "Login successful", "data": user, "access_token": access_token}


# --------------------------
# REGISTER
# --------------------------
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, response: Response, db: AsyncSession = Depends(get_db)):
    user, sid, access_token = await auth_service.register(db, data)
    set_session_cookie(response, sid)
    return {"message": "Registration successful", "data": user, "access_token": access_token}


# --------------------------
# CURRENT USER
# --------------------------
@router.get("/user", response_model=UserResponse)
async def current_user(_user: User = Depends(get_current_user)):
    return {"message": "User fetched successfully", "data": _user}


# --------------------------
# LOGOUT
# --------------------------
@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    _user: Optional[User] = Depends(get_optional_user),
):
    await auth_service.logout(db, request.cookies.get(SESSION_COOKIE_NAME), _user)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}
