"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the vendor login service happen here. No
module should call os.getenv() or os.environ.get() directly -- import
get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. mu_sparql_endpoint -> MU_SPARQL_ENDPOINT). Type coercion and
      validation are built in.

Env var names follow the mu.semte.ch conventions where one exists
(MU_SPARQL_ENDPOINT, LOG_SPARQL_QUERIES, LOG_SPARQL_UPDATES) so the service
drops into an existing stack without extra wiring.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or store/.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("vendorlogin.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Triple store
    # ------------------------------------------------------------------

    mu_sparql_endpoint: str = "http://database:8890/sparql"
    # Seconds. A stalled store call fails with StoreUnavailable instead of
    # holding the request open until the proxy gives up.
    sparql_timeout: float = 60.0
    log_sparql_queries: bool = False
    log_sparql_updates: bool = False

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------

    host: str = "0.0.0.0"  # nosec B104 -- runs inside a container network
    port: int = 80
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    login_rate_limit: str = "10/minute"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("mu_sparql_endpoint")
    @classmethod
    def validate_endpoint(cls, value: str) -> str:
        """Reject endpoints that requests cannot POST to."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("MU_SPARQL_ENDPOINT must be an http:// or https:// URL.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
