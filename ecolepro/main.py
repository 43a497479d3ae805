# ecolepro/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections, init_db
from .core.cache import cache_manager
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging

from .routers import ai_assistant, audit, backup, health, permissions, users
from .routers import settings as settings_router

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting EcolePro API")

    await init_db()
    await cache_manager.connect()
    logger.info(f"Cache {'connected' if cache_manager.enabled else 'disabled'}")

    yield

    logger.info("Shutting down EcolePro API")
    await cache_manager.disconnect()
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="EcolePro API - School Administration",
    description="Multi-school configuration, permissions, system users, audit trail and backups",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

# Include all routers
app.include_router(health.router)
app.include_router(settings_router.router)
app.include_router(permissions.router)
app.include_router(users.router)
app.include_router(audit.router)
app.include_router(backup.router)
app.include_router(ai_assistant.router)

@app.get("/")
async def root():
    return {
        "message": "EcolePro API",
        "version": settings.app_version,
        "features": ["Multi-school", "Role permissions", "Audit trail", "Backup & restore", "AI reports"],
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
