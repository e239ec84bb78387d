"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server can be started without any configuration; tests construct a
``Settings`` instance explicitly and hand it to ``create_app``.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Brightidy API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Empty string disables the file handler.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Path of the JSON document holding users, bookings and messages.  A
    # relative path is resolved against the project root by ``core.db``.
    database_path: str = os.getenv("DATABASE_PATH", "db.json")

    # When enabled, any cleaner may set any status on any booking, in any
    # direction.  By default only the assigned cleaner may change the
    # status and only forwards along the lifecycle.
    permissive_status_updates: bool = _env_flag("PERMISSIVE_STATUS_UPDATES")

    # When enabled, a database file that cannot be parsed is treated as
    # an empty database instead of failing the request.  Any data in the
    # file is lost on the next write.
    reset_corrupt_database: bool = _env_flag("RESET_CORRUPT_DATABASE")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
