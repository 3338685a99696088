import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum as SAEnum
from electrocare.core.db import Base
from electrocare.models.common import generate_id, utcnow


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    TECHNICIAN = "technician"
    CUSTOMER = "customer"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String, nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    password_hash = Column(String, nullable=True)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.CUSTOMER)
    status = Column(SAEnum(UserStatus), nullable=False, default=UserStatus.ACTIVE)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


class UserSession(Base):
    """Server-side session keyed by the opaque value stored in the session cookie."""
    __tablename__ = "sessions"

    sid = Column(String(128), primary_key=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
