"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with a local SQLite file and permissive CORS.  Tests
build their own ``Settings`` instances and pass them to
``create_app``.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Query Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.  The special value
    # ``:memory:`` keeps the data in memory for the lifetime of the
    # store (between ``connect`` and ``close``).
    database_url: str = os.getenv("DATABASE_URL", "query_tracker.db")

    # Prefix under which the routers are mounted.  Empty by default so
    # that the routes live at ``/queries`` and ``/form-data``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Comma‑separated list of allowed origins, ``*`` for any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Insert the demo FormData rows on startup when the table is empty.
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA")

    @property
    def api_prefix_normalized(self) -> str:
        """Return ``api_prefix`` with a leading and no trailing slash, or ``""``."""
        prefix = self.api_prefix.strip().strip("/")
        return f"/{prefix}" if prefix else ""

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
