"""
Configuration - Environment-driven settings and logging setup.

All variables use the SWARM_ADMIN_ prefix, e.g. SWARM_ADMIN_LOG_LEVEL=DEBUG.
List values are given as JSON: SWARM_ADMIN_PROTECTED_ROLES='["Admin"]'.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Admin core settings.

    Attributes:
        log_level: Root log level name
        default_page_size: Rows per page of a fresh users table
        latency_seconds: Simulated round-trip delay of every query/command
        fetch_timeout: Seconds before a table fetch is abandoned
        protected_roles: Role names that cannot be updated or deleted
        enforce_unique_email: Reject a second user with the same email
        enforce_permission_catalog: Reject permission keys outside the catalog
        seed_data: Load the demo users and roles into a new client
    """

    model_config = SettingsConfigDict(env_prefix="SWARM_ADMIN_", extra="ignore")

    log_level: Optional[str] = "INFO"
    default_page_size: int = Field(default=5, gt=0)
    latency_seconds: float = Field(default=0.0, ge=0.0)
    fetch_timeout: float = Field(default=10.0, gt=0.0)
    protected_roles: List[str] = Field(default_factory=lambda: ["Admin"])
    enforce_unique_email: bool = True
    enforce_permission_catalog: bool = True
    seed_data: bool = True

    @field_validator("protected_roles")
    @classmethod
    def strip_role_names(cls, value: List[str]) -> List[str]:
        return [name.strip() for name in value if name.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """
    Configure logging based on settings.

    Args:
        settings: Settings instance providing log_level
    """
    if not settings.log_level:
        logging.basicConfig(level=logging.INFO)
        return

    numeric_level = getattr(logging, settings.log_level.upper(), None)
    if not isinstance(numeric_level, int):
        logger.warning("Invalid log level: %s, using INFO", settings.log_level)
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level)
