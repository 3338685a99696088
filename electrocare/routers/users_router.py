# electrocare/routers/users_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from electrocare.core.db import get_db
from electrocare.models.user_models import UserRole, UserStatus
from electrocare.schemas.user_schemas import (
    UserCreate, UserUpdate, ProfileUpdate, UserResponse, UsersListResponse, MessageResponse
)
from electrocare.utils.get_user import get_current_user
from electrocare.utils.check_roles import require_role
from electrocare.services.user_service import (
    create_user, list_users, get_user_by_id, update_user, update_profile, delete_user
)

router = APIRouter(prefix="/users", tags=["Users"])


# ---------------------------
# OWN PROFILE
# ---------------------------
@router.get("/profile", response_model=UserResponse)
async def get_profile_route(_user=Depends(get_current_user)):
    return {"message": "Profile fetched successfully", "data": _user}


@router.put("/profile", response_model=UserResponse)
async def update_profile_route(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    user = await update_profile(db, _user, data)
    return {"message": "Profile updated successfully", "data": user}


# ---------------------------
# CREATE USER
# ---------------------------
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin"])
async def create_user_route(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    new_user = await create_user(db, user_data, _user)
    return {"message": f"User '{new_user.email}' created successfully.", "data": new_user}


# ---------------------------
# LIST ALL USERS
# ---------------------------
@router.get("", response_model=UsersListResponse, include_in_schema=False)
@router.get("/", response_model=UsersListResponse)
@require_role(["admin"])
async def list_users_route(
    role: Optional[UserRole] = Query(None),
    status: Optional[UserStatus] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    users = await list_users(db, role=role, status=status, limit=limit, offset=offset)
    return {"message": f"{len(users)} users fetched successfully.", "data": users}


# ---------------------------
# GET SINGLE USER
# ---------------------------
@router.get("/{user_id}", response_model=UserResponse)
@require_role(["admin"])
async def get_user_route(user_id: str, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    target_user = await get_user_by_id(db, user_id)
    return {"message": f"User with ID {user_id} fetched successfully.", "data": target_user}


# ---------------------------
# UPDATE USER
# ---------------------------
@router.put("/{user_id}", response_model=UserResponse)
@require_role(["admin"])
async def update_user_route(
    user_id: str,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
):
    updated_user = await update_user(db, user_id, user_data, _user)
    return {"message": f"User '{updated_user.email}' updated successfully.", "data": updated_user}


# ---------------------------
# DELETE USER
# ---------------------------
@router.delete("/{user_id}", response_model=MessageResponse)
@require_role(["admin"])
async def delete_user_route(user_id: str, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    deleted_user = await delete_user(db, user_id, _user)
    return {"message": f"User '{deleted_user.email}' deleted successfully."}
