# ecolepro/routers/audit.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.session import require_super_admin
from ..schemas.audit_schemas import AuditLogEntry
from ..schemas.user_schemas import SessionContext
from ..services.configuration_service import ConfigurationService
from ..services.store_service import PersistedStore

router = APIRouter(prefix="/api/v1/audit-logs", tags=["Audit"])


@router.get("/", response_model=List[AuditLogEntry])
async def list_audit_logs(
    school_id: Optional[str] = Query(None),
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    """Newest entries first"""
    return await ConfigurationService(PersistedStore(db)).list_audit_logs(school_id)
