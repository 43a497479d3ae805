# tests/conftest.py
import os
import pytest

# Settings are read at import time, so the test environment goes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "")  # Disable Redis for tests
os.environ.setdefault("GEMINI_API_KEY", "")
os.environ.setdefault("ENVIRONMENT", "test")

from httpx import ASGITransport, AsyncClient

from ecolepro.core.cache import CacheManager
from ecolepro.core.database import build_engine, build_sessionmaker, get_db, init_db
from ecolepro.schemas.enums import UserRole
from ecolepro.schemas.user_schemas import SessionContext
from ecolepro.services.store_service import PersistedStore


@pytest.fixture()
async def engine():
    e = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(e)
    yield e
    await e.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture()
def store(db):
    return PersistedStore(db, CacheManager(None))


@pytest.fixture()
def super_admin():
    return SessionContext(user_id="USER_SUPER", name="Super Admin", role=UserRole.SUPER_ADMIN)


@pytest.fixture()
def school_admin():
    return SessionContext(user_id="USER_ADMIN", name="Admin Principal", role=UserRole.ADMIN, school_id="SCHOOL_01")


@pytest.fixture()
async def client(session_factory):
    from ecolepro.main import app

    async def _override_get_db():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def super_admin_headers():
    return {"X-User-Id": "USER_SUPER", "X-User-Name": "Super Admin", "X-User-Role": "SUPER_ADMIN"}


@pytest.fixture()
def admin_headers():
    return {
        "X-User-Id": "USER_ADMIN",
        "X-User-Name": "Admin Principal",
        "X-User-Role": "ADMIN",
        "X-School-Id": "SCHOOL_01",
    }


@pytest.fixture()
def teacher_headers():
    return {
        "X-User-Id": "USER_TEACHER",
        "X-User-Name": "Prof. Test",
        "X-User-Role": "TEACHER",
        "X-School-Id": "SCHOOL_01",
    }
