"""Application configuration helpers."""

from __future__ import annotations

from .catalog import (
    CatalogConfig,
    RemoteCatalogConfig,
    get_catalog_config,
    get_remote_catalog_config,
)
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CatalogConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RemoteCatalogConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_catalog_config",
    "get_remote_catalog_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
