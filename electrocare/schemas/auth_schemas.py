# electrocare/schemas/auth_schemas.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal

from electrocare.schemas.user_schemas import UserOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    phone: Optional[str] = None


class AuthResponse(BaseModel):
    message: str
    data: UserOut
    access_token: Optional[str] = None
    token_type: Literal["bearer"] = "bearer"
