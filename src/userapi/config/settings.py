"""
Configuration settings for the User Records API
"""

import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Fallback used when API_KEY is unset. Known weak value, only fit for local development.
DEFAULT_API_KEY = "dummy-key"

# Paths under this prefix require a valid X-API-Key header
PROTECTED_PREFIX = "/users"

PORT = int(os.getenv("PORT", 8080))


class StoreBackend(str, Enum):
    MEMORY = "memory"
    POSTGRES = "postgres"


class NameMatch(str, Enum):
    """How the ?name= filter on GET /users compares against stored names"""
    SUBSTRING = "substring"
    PREFIX = "prefix"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration"""
    api_key: str = DEFAULT_API_KEY
    store_backend: StoreBackend = StoreBackend.MEMORY
    name_match: Optional[NameMatch] = None  # None means the backend's own default
    seed_sample_users: bool = True
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_pool_min: int = 2
    db_pool_max: int = 10
    db_command_timeout: float = 60.0
    db_close_timeout: float = 5.0
    log_level: str = "INFO"

    @property
    def uses_default_api_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY

    def database_target(self) -> str:
        """user@host:port/db, safe for logging"""
        return f"{self.db_user}@{self.db_host}:{self.db_port}/{self.db_name}"


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Raises:
        ValueError: if a value cannot be parsed
    """
    env = os.environ if environ is None else environ

    try:
        store_backend = StoreBackend(env.get("STORE_BACKEND", StoreBackend.MEMORY.value).lower())
    except ValueError:
        raise ValueError(f"STORE_BACKEND must be one of: {', '.join(b.value for b in StoreBackend)}")

    name_match = None
    if env.get("USER_NAME_MATCH"):
        try:
            name_match = NameMatch(env["USER_NAME_MATCH"].lower())
        except ValueError:
            raise ValueError(f"USER_NAME_MATCH must be one of: {', '.join(m.value for m in NameMatch)}")

    settings = Settings(
        api_key=env.get("API_KEY") or DEFAULT_API_KEY,
        store_backend=store_backend,
        name_match=name_match,
        seed_sample_users=_parse_bool(env.get("SEED_SAMPLE_USERS", "true")),
        db_host=env.get("DB_HOST") or "localhost",
        db_port=int(env.get("DB_PORT") or 5432),
        db_user=env.get("DB_USER"),
        db_password=env.get("DB_PASSWORD"),
        db_name=env.get("DB_NAME"),
        db_pool_min=int(env.get("DB_POOL_MIN", 2)),
        db_pool_max=int(env.get("DB_POOL_MAX", 10)),
        db_command_timeout=float(env.get("DB_COMMAND_TIMEOUT", 60)),
        db_close_timeout=float(env.get("DB_CLOSE_TIMEOUT", 5)),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )

    if settings.db_pool_min > settings.db_pool_max:
        raise ValueError("DB_POOL_MIN cannot be greater than DB_POOL_MAX")

    if settings.uses_default_api_key:
        logger.warning("API_KEY not set - falling back to the insecure default key")

    return settings
