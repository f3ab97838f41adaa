"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first so local deployments can keep the connection string and
port next to the code.  Defaults are provided for all fields.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent  # exercise_tracker_api/


def resolve_project_path(path: str) -> str:
    """Resolve a relative path against the project root; absolute paths pass through."""
    if os.path.isabs(path):
        return path
    return str((PROJECT_ROOT / path).resolve())


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Exercise Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection string for the store.  A filesystem path to the SQLite
    # database or ``:memory:``.  Relative paths are resolved against the
    # project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", os.getenv("DB_URL", "exercise_tracker.db"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma-separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Cap applied to the logs endpoint when ``limit`` is missing or not
    # a positive integer.
    default_log_limit: int = int(os.getenv("DEFAULT_LOG_LIMIT", "500"))

    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
