# ecolepro/schemas/audit_schemas.py
from typing import Optional
from pydantic import BaseModel

from .enums import AuditLevel


class AuditLogEntry(BaseModel):
    id: str
    school_id: Optional[str] = None
    action: str
    user: str
    timestamp: str
    details: str
    type: AuditLevel = AuditLevel.INFO
