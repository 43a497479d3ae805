# ecolepro/services/audit_service.py
"""Best-effort audit trail writer."""
import logging
from typing import List, Optional

from ..schemas.audit_schemas import AuditLogEntry
from ..schemas.enums import AuditLevel
from .store_service import PersistedStore

logger = logging.getLogger(__name__)


class AuditService:
    def __init__(self, store: PersistedStore):
        self.store = store

    async def record(
        self,
        action: str,
        user: str,
        details: str,
        level: AuditLevel = AuditLevel.INFO,
        school_id: Optional[str] = None,
    ) -> Optional[AuditLogEntry]:
        """Append an entry; a failure is logged and never reaches the caller."""
        try:
            entry = await self.store.log_action(action, user, details, level, school_id)
            return AuditLogEntry(**entry)
        except Exception as e:
            logger.error(f"Audit write failed for '{action}': {e}")
            try:
                await self.store.db.rollback()
            except Exception as rollback_error:
                logger.error(f"Rollback after audit failure failed: {rollback_error}")
            return None

    async def list_entries(self, school_id: Optional[str] = None) -> List[AuditLogEntry]:
        return [AuditLogEntry(**entry) for entry in await self.store.get_audit_logs(school_id)]
