# ecolepro/services/backup_service.py
"""Full-store export, JSON restore and factory reset."""
import json
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

from pydantic import ValidationError as SchemaValidationError

from ..core.config import settings
from ..core.exceptions import UnsupportedRestoreFormat
from ..core.seed_data import COLLECTION_KEYS, CORE_COLLECTIONS, SQL_TABLE_NAMES
from ..schemas.backup_schemas import BackupDocument
from ..schemas.enums import BackupFormat
from ..schemas.school_schemas import School
from ..schemas.user_schemas import SystemUser
from ..utils.sql_dump import rows_to_sql
from .store_service import PersistedStore

logger = logging.getLogger(__name__)

BACKUP_SCHEMA_VERSION = 1
SQL_DUMP_HEADER = "-- EcolePro SQL Dump"


def backup_filename(format: Union[BackupFormat, str] = BackupFormat.JSON, day: Optional[date] = None) -> str:
    """Download name, e.g. ecolepro_backup_2024-03-10.json"""
    extension = BackupFormat(format).value.lower()
    day = day or datetime.now(timezone.utc).date()
    return f"{settings.backup_filename_prefix}_{day.isoformat()}.{extension}"


def is_sql_backup(text: str, filename: Optional[str] = None) -> bool:
    if filename and filename.lower().endswith(".sql"):
        return True
    return text.lstrip().startswith(SQL_DUMP_HEADER)


class BackupService:
    def __init__(self, store: PersistedStore):
        self.store = store

    async def create_backup(self, format: Union[BackupFormat, str] = BackupFormat.JSON) -> str:
        export_format = BackupFormat(format)
        collections = await self.store.snapshot()
        generated_at = datetime.now(timezone.utc).isoformat()

        if export_format == BackupFormat.JSON:
            document = {
                "timestamp": generated_at,
                "schema_version": BACKUP_SCHEMA_VERSION,
                **collections,
            }
            return json.dumps(document, indent=2, ensure_ascii=False)

        dump = f"{SQL_DUMP_HEADER}\n-- Generated: {generated_at}\n\n"
        for key in COLLECTION_KEYS:
            dump += rows_to_sql(SQL_TABLE_NAMES[key], collections[key])
        return dump

    async def restore_backup(self, text: str, filename: Optional[str] = None) -> bool:
        """Replace the store with a JSON backup.

        Returns False, with nothing written, when the document does not parse,
        lacks a required collection, or holds a school or user record that
        does not load. Collections the document omits are left as they are.
        """
        if is_sql_backup(text, filename):
            raise UnsupportedRestoreFormat("SQL")

        try:
            document = BackupDocument.model_validate(json.loads(text))
            # rows are stored as given, but schools and users must still load afterwards
            for row in document.schools:
                School.model_validate(row)
            for row in document.users:
                SystemUser.model_validate(row)
        except (json.JSONDecodeError, SchemaValidationError, TypeError) as e:
            logger.error(f"Backup rejected: {e}")
            return False

        if document.schema_version != BACKUP_SCHEMA_VERSION:
            logger.warning(
                f"Backup schema version {document.schema_version} differs from "
                f"{BACKUP_SCHEMA_VERSION}, restoring anyway"
            )

        replacements = {key: getattr(document, key) for key in CORE_COLLECTIONS}
        for key in COLLECTION_KEYS:
            if key not in replacements and getattr(document, key) is not None:
                replacements[key] = getattr(document, key)

        try:
            await self.store.replace_collections(replacements)
        except Exception as e:
            logger.error(f"Restore failed, store left unchanged: {e}")
            return False

        logger.warning(f"Store restored from backup dated {document.timestamp} ({len(replacements)} collections)")
        return True

    async def factory_reset(self) -> None:
        await self.store.reset()
