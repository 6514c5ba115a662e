"""
Configuration for the Customer Service API.

Settings are read from environment variables into a plain dataclass,
with a default for every field.  Values are computed once when the
module is imported, so environment variables must be set before the
first import.  Tests may override attributes on the ``settings``
instance directly.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Customer Service API")
    api_version: str = os.getenv("API_VERSION", "v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "customers.db")

    # Principal recorded in ``created_by``/``updated_by`` when the store
    # stamps audit columns.
    audit_actor: str = os.getenv("AUDIT_ACTOR", "CUSTOMER_MS")

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


settings = Settings()
