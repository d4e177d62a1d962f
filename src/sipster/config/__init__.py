"""Application configuration helpers."""

from __future__ import annotations

from .cocktaildb import CocktailDbConfig, get_cocktaildb_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_http_cache_path,
    get_storage_config,
)

__all__ = [
    "CacheConfig",
    "CocktailDbConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_cocktaildb_config",
    "get_database_config",
    "get_http_cache_path",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
