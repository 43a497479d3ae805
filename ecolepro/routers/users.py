# ecolepro/routers/users.py
"""System user management."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.session import require_school_admin
from ..schemas.user_schemas import SessionContext, SystemUser, SystemUserDraft
from ..services.configuration_service import ConfigurationService
from ..services.store_service import PersistedStore

router = APIRouter(prefix="/api/v1/users", tags=["System Users"])


@router.get("/", response_model=List[SystemUser])
async def list_system_users(
    school_id: Optional[str] = Query(None),
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    """School admins only ever see their own school"""
    if not session.is_super_admin:
        school_id = session.school_id
    return await ConfigurationService(PersistedStore(db)).list_system_users(school_id)


@router.post("/", response_model=SystemUser)
async def save_system_user(
    draft: SystemUserDraft,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    return await ConfigurationService(PersistedStore(db)).save_system_user(session, draft)


@router.delete("/{user_id}")
async def delete_system_user(
    user_id: str,
    session: SessionContext = Depends(require_school_admin),
    db: AsyncSession = Depends(get_db)
):
    await ConfigurationService(PersistedStore(db)).delete_system_user(session, user_id)
    return {"message": f"System user {user_id} deleted"}
