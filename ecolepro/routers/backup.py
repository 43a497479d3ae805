# ecolepro/routers/backup.py
"""Backup download, restore upload and factory reset."""
import logging
from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.session import require_super_admin
from ..schemas.backup_schemas import RestoreResult
from ..schemas.enums import AuditLevel, BackupFormat
from ..schemas.user_schemas import SessionContext
from ..services.audit_service import AuditService
from ..services.backup_service import BackupService, backup_filename
from ..services.store_service import PersistedStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/backup", tags=["Backup"])

MEDIA_TYPES = {
    BackupFormat.JSON: "application/json",
    BackupFormat.SQL: "application/sql",
}


@router.get("/")
async def download_backup(
    format: BackupFormat = Query(BackupFormat.JSON),
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    """Full export of every collection as an attachment"""
    content = await BackupService(PersistedStore(db)).create_backup(format)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f"attachment; filename={backup_filename(format)}"}
    )


@router.post("/restore", response_model=RestoreResult)
async def restore_backup(
    file: UploadFile = File(...),
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    """Overwrite the store from a JSON backup file"""
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = ""

    store = PersistedStore(db)
    if not await BackupService(store).restore_backup(text, file.filename):
        return JSONResponse(
            status_code=400,
            content=RestoreResult(success=False, message="Échec de la restauration. Fichier invalide.").model_dump()
        )

    await AuditService(store).record(
        "Restauration", session.name, f"Restauration depuis {file.filename}", AuditLevel.CRITICAL
    )
    return RestoreResult(success=True, message="Restauration réussie ! Rechargez l'application.")


@router.post("/factory-reset", response_model=RestoreResult)
async def factory_reset(
    session: SessionContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db)
):
    """Erase everything and reload the demo dataset"""
    logger.warning(f"Factory reset requested by {session.name} ({session.user_id})")
    await BackupService(PersistedStore(db)).factory_reset()
    return RestoreResult(success=True, message="Système réinitialisé.")
