# ivisit/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── iVisit Backend ────────────────────────────────────────────────────
    IVISIT_API_URL: str = "http://localhost:8080"
    IVISIT_API_TOKEN: Optional[str] = None     # Bearer token forwarded to the backend
    IVISIT_API_TIMEOUT_SECONDS: float = 10.0

    # ── Network ───────────────────────────────────────────────────────────
    DASHBOARD_IP: str = "0.0.0.0"
    DASHBOARD_PORT: int = 8090

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Log Book ──────────────────────────────────────────────────────────
    DEFAULT_PAGE_SIZE: int = 25
    MAX_PAGE_SIZE: int = 200

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None          # Defaults to logs/ at the project root
    LOG_FILE: str = "ivisit-dashboard.log"
    LOG_FILE_MAX_BYTES: int = 2 * 1024 * 1024
    LOG_FILE_BACKUPS: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
