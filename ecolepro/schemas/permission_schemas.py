# ecolepro/schemas/permission_schemas.py
"""Pydantic schemas for the permission catalog and its editing requests."""
from typing import Dict, List
from pydantic import BaseModel, Field

from .enums import UserRole


class PermissionDefinition(BaseModel):
    id: str
    label: str
    description: str


class ModuleDefinition(BaseModel):
    id: str
    label: str
    description: str
    permissions: List[PermissionDefinition] = Field(default_factory=list)


class TogglePermissionRequest(BaseModel):
    role: UserRole
    permission_id: str
    role_permissions: Dict[str, List[str]] = Field(default_factory=dict)


class SubjectEditRequest(BaseModel):
    subjects: List[str]
    name: str


class ModuleAccess(BaseModel):
    school_id: str
    module: str
    role: UserRole
    allowed: bool
