# ecolepro/routers/permissions.py
"""Module catalog, default grants and the pure permission editing helpers."""
from typing import Dict, List
from fastapi import APIRouter, Depends

from ..core.permissions import (
    CONFIGURABLE_ROLES,
    module_catalog,
    toggle_permission,
)
from ..core.session import get_session_context, require_school_admin
from ..schemas.permission_schemas import ModuleDefinition, SubjectEditRequest, TogglePermissionRequest
from ..schemas.user_schemas import SessionContext
from ..services.configuration_service import add_subject, remove_subject, reset_permissions, reset_subjects

router = APIRouter(prefix="/api/v1/permissions", tags=["Permissions"])


@router.get("/modules", response_model=List[ModuleDefinition])
async def get_module_catalog(session: SessionContext = Depends(get_session_context)):
    """Every module with its fine-grained permissions"""
    return module_catalog()


@router.get("/defaults")
async def get_defaults(session: SessionContext = Depends(get_session_context)):
    return {
        "role_permissions": reset_permissions(),
        "subjects": reset_subjects(),
        "configurable_roles": [role.value for role in CONFIGURABLE_ROLES],
    }


@router.post("/toggle", response_model=Dict[str, List[str]])
async def toggle(
    request: TogglePermissionRequest,
    session: SessionContext = Depends(require_school_admin)
):
    """Flip one permission for one role in an unsaved matrix"""
    return toggle_permission(request.role, request.permission_id, request.role_permissions)


@router.post("/subjects/add", response_model=List[str])
async def add_subject_to_list(
    request: SubjectEditRequest,
    session: SessionContext = Depends(require_school_admin)
):
    return add_subject(request.subjects, request.name)


@router.post("/subjects/remove", response_model=List[str])
async def remove_subject_from_list(
    request: SubjectEditRequest,
    session: SessionContext = Depends(require_school_admin)
):
    return remove_subject(request.subjects, request.name)
