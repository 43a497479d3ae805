# ecolepro/core/error_handlers.py
"""Fallback handling for unexpected exceptions."""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": "InternalError"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    # HTTPException subclasses are rendered by FastAPI itself
    app.add_exception_handler(Exception, general_exception_handler)
