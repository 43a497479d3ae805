# ecolepro/models/store_collection.py
from typing import Any, List
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class StoreCollection(Base):
    """One named collection of records, kept as a single JSON document"""
    __tablename__ = "store_collections"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<StoreCollection(key='{self.key}', rows={len(self.payload or [])})>"
