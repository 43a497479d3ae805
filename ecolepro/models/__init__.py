# ecolepro/models/__init__.py
"""Import all models here, if needed for Alembic migration."""
from .base import Base
from .store_collection import StoreCollection
