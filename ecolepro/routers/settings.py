# ecolepro/routers/settings.py
"""School settings: identity, modules, permissions, subjects and PIN."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.permissions import can_access_module
from ..core.session import get_session_context, require_school_admin, require_super_admin
from ..schemas.enums import UserRole
from ..schemas.permission_schemas import ModuleAccess
from ..schemas.school_schemas import (
    GeneralSettingsUpdate,
    PermissionsSubjectsUpdate,
    PinChangeRequest,
    PinVerifyRequest,
    School,
    SchoolDraft,
    SettingsView,
)
from ..schemas.user_schemas import SessionContext
from ..services.configuration_service import ConfigurationService
from ..services.store_service import PersistedStore

router = APIRouter(prefix="/api/v1/settings", tags=["Settings"])


def _service(db: AsyncSession) -> ConfigurationService:
    return ConfigurationService(PersistedStore(db))


@router.get("/active-school", response_model=SettingsView)
async def get_active_school_settings(
    session: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """Active school with its permission matrix and subject list"""
    return await _service(db).load_settings(session)


@router.get("/schools", response_model=List[School])
async def list_schools(
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    return await _service(db).list_schools()


@router.post("/schools", response_model=School)
async def save_school(
    draft: SchoolDraft,
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a school, or update one when the draft carries an existing id"""
    return await _service(db).save_school(session, draft)


@router.put("/schools/{school_id}/general", response_model=School)
async def save_general_settings(
    school_id: str,
    update: GeneralSettingsUpdate,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    return await _service(db).save_general_settings(session, school_id, update)


@router.put("/schools/{school_id}/permissions", response_model=School)
async def save_permissions_and_subjects(
    school_id: str,
    update: PermissionsSubjectsUpdate,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    return await _service(db).save_permissions_and_subjects(
        session, school_id, update.role_permissions, update.subjects
    )


@router.post("/schools/{school_id}/pin")
async def change_pin(
    school_id: str,
    request: PinChangeRequest,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    await _service(db).change_pin(
        session, school_id, request.current_pin, request.new_pin, request.confirm_pin
    )
    return {"message": "Code PIN de sécurité mis à jour avec succès."}


@router.post("/schools/{school_id}/pin/verify")
async def verify_pin(
    school_id: str,
    request: PinVerifyRequest,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    return {"valid": await _service(db).verify_pin(school_id, request.pin)}


@router.get("/schools/{school_id}/access/{module}", response_model=ModuleAccess)
async def check_module_access(
    school_id: str,
    module: str,
    role: Optional[UserRole] = Query(None, description="Defaults to the session role"),
    session: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """Whether a role sees a module in the navigation of a school"""
    school = await _service(db).get_school(school_id)
    target_role = role or session.role
    allowed = can_access_module(
        school.config.role_permissions, school.modules, target_role, module.upper()
    )
    return ModuleAccess(school_id=school.id, module=module.upper(), role=target_role, allowed=allowed)
