# ecolepro/schemas/school_schemas.py
"""Pydantic schemas for School entity and its embedded configuration."""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .enums import SchoolModule, SchoolType


def _unique_modules(modules: List[SchoolModule]) -> List[SchoolModule]:
    seen = set()
    ordered = []
    for module in modules:
        if module not in seen:
            seen.add(module)
            ordered.append(module)
    return ordered


class SchoolConfig(BaseModel):
    school_name: str = Field(..., description="Displayed school name")
    address: str = Field(default="", description="Displayed address")
    phone: str = Field(default="")
    email: str = Field(default="")
    academic_year: str = Field(default="")
    director_name: str = Field(default="")
    admin_pin: Optional[str] = Field(default=None, description="Settings access PIN, '0000' when unset")
    role_permissions: Optional[Dict[str, List[str]]] = Field(default=None, description="Role -> permission ids")
    subjects: Optional[List[str]] = Field(default=None, description="Subject names taught")


class School(BaseModel):
    id: str
    name: str
    address: str = ""
    logo_url: Optional[str] = None
    type: SchoolType = SchoolType.SECONDAIRE
    modules: List[SchoolModule] = Field(default_factory=list)
    config: SchoolConfig

    @field_validator('modules')
    @classmethod
    def dedupe_modules(cls, v):
        return _unique_modules(v)


class SchoolConfigDraft(BaseModel):
    """Config fields a school form may carry; only explicitly set ones are merged"""
    school_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    academic_year: Optional[str] = None
    director_name: Optional[str] = None
    admin_pin: Optional[str] = None
    role_permissions: Optional[Dict[str, List[str]]] = None
    subjects: Optional[List[str]] = None


class SchoolDraft(BaseModel):
    """Schema for the multi-school form - all fields optional"""
    id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = None
    type: Optional[SchoolType] = None
    modules: Optional[List[SchoolModule]] = None
    config: Optional[SchoolConfigDraft] = None

    @field_validator('modules')
    @classmethod
    def dedupe_modules(cls, v):
        return _unique_modules(v) if v is not None else v


class GeneralSettingsUpdate(BaseModel):
    """Schema for the general settings tab of the active school"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    address: Optional[str] = None
    logo_url: Optional[str] = None
    modules: Optional[List[SchoolModule]] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    academic_year: Optional[str] = None
    director_name: Optional[str] = None

    @field_validator('modules')
    @classmethod
    def dedupe_modules(cls, v):
        return _unique_modules(v) if v is not None else v


class PermissionsSubjectsUpdate(BaseModel):
    role_permissions: Dict[str, List[str]]
    subjects: List[str]


class PinChangeRequest(BaseModel):
    current_pin: str
    new_pin: str
    confirm_pin: str


class PinVerifyRequest(BaseModel):
    pin: str


class SettingsView(BaseModel):
    """Active school plus the editable permission/subject drafts"""
    school: School
    role_permissions: Dict[str, List[str]]
    subjects: List[str]
