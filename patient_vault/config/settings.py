"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "Patient Vault"
    app_version: str = "1.0.0"
    debug: bool = True

    # Record store
    storage_type: str = "local"  # local, supabase
    local_storage_path: str = "./data"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    fetch_timeout_seconds: float = 15.0

    # Timeline
    timeline_record_importance: str = "medium"  # medium or low

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/patient_vault.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
