"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with a local SQLite file and a development signing key;
override them via environment variables in a real deployment.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Warga API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Roles allowed to create, update and delete records.  The names match
    # the ``role`` claim issued by the authentication service.
    privileged_roles: Tuple[str, ...] = field(
        default_factory=lambda: _split_csv(os.getenv("PRIVILEGED_ROLES", "adminSistem,ketuaRT,ketuaRW"))
    )

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "warga.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
