# ecolepro/schemas/user_schemas.py
"""Pydantic schemas for system users and the request session."""
from typing import Optional
from pydantic import BaseModel, Field

from .enums import UserRole, UserStatus


class SystemUser(BaseModel):
    id: str
    school_id: Optional[str] = None
    name: str
    email: str
    role: UserRole
    last_login: str = "Jamais"
    status: UserStatus = UserStatus.ACTIVE
    avatar_url: Optional[str] = None


class SystemUserDraft(BaseModel):
    """Schema for creating or replacing a system user"""
    id: Optional[str] = None
    school_id: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=254)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    last_login: Optional[str] = None


class SessionContext(BaseModel):
    """The logged-in user an operation acts on behalf of."""
    user_id: str
    name: str
    role: UserRole
    school_id: Optional[str] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN
