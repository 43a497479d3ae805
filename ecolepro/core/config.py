# ecolepro/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str = 'sqlite+aiosqlite:///./ecolepro.db'
    redis_url: Optional[str] = None

    gemini_api_key: Optional[str] = None
    gemini_model: str = 'gemini-2.5-flash'
    gemini_timeout_seconds: float = 60.0

    app_name: str = 'ecolepro'
    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    audit_log_limit: int = 100
    strict_user_scoping: bool = False
    backup_filename_prefix: str = 'ecolepro_backup'

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
