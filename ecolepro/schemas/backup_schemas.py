# ecolepro/schemas/backup_schemas.py
"""Structured backup document layout."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

Rows = List[Dict[str, Any]]


class BackupDocument(BaseModel):
    """One field per store collection; rows stay opaque so restores are byte-faithful"""
    model_config = ConfigDict(extra='ignore')

    timestamp: Optional[str] = None
    schema_version: Optional[int] = None

    schools: Rows
    students: Rows
    teachers: Rows
    classes: Rows
    transactions: Rows
    messages: Rows
    events: Rows
    users: Rows

    books: Optional[Rows] = None
    loans: Optional[Rows] = None
    resources: Optional[Rows] = None
    notifications: Optional[Rows] = None
    lesson_logs: Optional[Rows] = None
    canteen_items: Optional[Rows] = None
    time_slots: Optional[Rows] = None
    audit_logs: Optional[Rows] = None
    tickets: Optional[Rows] = None


class RestoreResult(BaseModel):
    success: bool
    message: str
