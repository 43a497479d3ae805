# ecolepro/services/store_service.py
"""Persisted key-value store of entity collections."""
import copy
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from ..core.cache import CacheManager, cache_manager
from ..core.config import settings
from ..core.seed_data import COLLECTION_KEYS, build_seed_collections, seed_collection
from ..models.store_collection import StoreCollection
from ..schemas.enums import AuditLevel
from ..utils.cache_invalidation import (
    collection_cache_key,
    invalidate_collection_cache,
    invalidate_store_cache,
)

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class PersistedStore:
    """Collections of JSON records, one database row per collection.

    A collection that has never been written is initialised from the seed
    dataset on first read. Reads go through the cache when one is configured.
    """

    def __init__(self, db: AsyncSession, cache: Optional[CacheManager] = None):
        self.db = db
        self.cache = cache or cache_manager

    # --- raw collections ---

    async def get_collection(self, key: str) -> List[Record]:
        self._check_key(key)

        cached = await self.cache.get(collection_cache_key(key))
        if isinstance(cached, list):
            return cached

        stmt = select(StoreCollection.payload).where(StoreCollection.key == key)
        result = await self.db.execute(stmt)
        payload = result.scalar_one_or_none()

        if payload is None:
            payload = seed_collection(key)
            logger.info(f"Seeding collection '{key}' with {len(payload)} records")
            await self._write(key, payload)
            await self.db.commit()

        await self.cache.set(collection_cache_key(key), payload)
        return copy.deepcopy(payload)

    async def set_collection(self, key: str, rows: List[Record]) -> None:
        self._check_key(key)
        await self._write(key, rows)
        await self.db.commit()
        await invalidate_collection_cache(key, self.cache)

    async def snapshot(self) -> Dict[str, List[Record]]:
        """Every managed collection, keyed by collection name."""
        return {key: await self.get_collection(key) for key in COLLECTION_KEYS}

    async def replace_collections(self, collections: Mapping[str, List[Record]]) -> None:
        """Overwrite several collections in a single transaction."""
        for key in collections:
            self._check_key(key)

        try:
            for key, rows in collections.items():
                await self._write(key, rows)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await invalidate_store_cache(self.cache)

    async def reset(self) -> None:
        """Drop every collection and write the seed dataset back."""
        seed = build_seed_collections()
        try:
            await self.db.execute(delete(StoreCollection))
            self.db.expunge_all()
            for key, rows in seed.items():
                self.db.add(StoreCollection(key=key, payload=rows))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await invalidate_store_cache(self.cache)
        logger.warning("Store reset to the demo dataset")

    # --- schools ---

    async def get_schools(self) -> List[Record]:
        return await self.get_collection("schools")

    async def get_school_by_id(self, school_id: str) -> Optional[Record]:
        for school in await self.get_schools():
            if school.get("id") == school_id:
                return school
        return None

    async def save_school(self, school: Record) -> bool:
        """Insert or replace a school by id, returns True when it was created."""
        schools = await self.get_schools()
        created = not any(s.get("id") == school["id"] for s in schools)
        if created:
            schools.append(school)
        else:
            schools = [school if s.get("id") == school["id"] else s for s in schools]
        await self.set_collection("schools", schools)
        return created

    # --- system users ---

    async def get_system_users(self, school_id: Optional[str] = None) -> List[Record]:
        users = await self.get_collection("users")
        if school_id:
            return [u for u in users if u.get("school_id") == school_id]
        return users

    async def save_system_user(self, user: Record) -> bool:
        users = await self.get_collection("users")
        created = not any(u.get("id") == user["id"] for u in users)
        if created:
            users.append(user)
        else:
            users = [user if u.get("id") == user["id"] else u for u in users]
        await self.set_collection("users", users)
        return created

    async def delete_system_user(self, user_id: str) -> bool:
        users = await self.get_collection("users")
        remaining = [u for u in users if u.get("id") != user_id]
        if len(remaining) == len(users):
            return False
        await self.set_collection("users", remaining)
        return True

    # --- audit trail ---

    async def get_audit_logs(self, school_id: Optional[str] = None) -> List[Record]:
        logs = await self.get_collection("audit_logs")
        if school_id:
            return [entry for entry in logs if entry.get("school_id") == school_id]
        return logs

    async def log_action(
        self,
        action: str,
        user: str,
        details: str,
        level: AuditLevel = AuditLevel.INFO,
        school_id: Optional[str] = None,
    ) -> Record:
        """Prepend an audit entry, keeping only the newest entries."""
        entry = {
            "id": str(int(time.time() * 1000)),
            "school_id": school_id,
            "action": action,
            "user": user,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details,
            "type": AuditLevel(level).value,
        }
        logs = await self.get_collection("audit_logs")
        await self.set_collection("audit_logs", [entry, *logs][: settings.audit_log_limit])
        return entry

    # --- helpers ---

    @staticmethod
    def _check_key(key: str):
        if key not in COLLECTION_KEYS:
            raise KeyError(f"Unknown store collection: {key}")

    async def _write(self, key: str, rows: List[Record]):
        payload = copy.deepcopy(list(rows))
        row = await self.db.get(StoreCollection, key)
        if row is None:
            self.db.add(StoreCollection(key=key, payload=payload))
        else:
            row.payload = payload
            flag_modified(row, "payload")
