"""Catalog source configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig

CATALOG_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Where to read the catalog from; ``None`` selects the bundled catalog."""

    path: Path | None = None


@dataclass(frozen=True)
class RemoteCatalogConfig:
    """Holds the remote catalog endpoint configuration."""

    url: str
    resilience: ResilienceConfig


def get_catalog_config() -> CatalogConfig:
    env_path = optional_env_var("APPLIBRARY_CATALOG_PATH")
    return CatalogConfig(path=Path(env_path).expanduser() if env_path else None)


def get_remote_catalog_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> RemoteCatalogConfig:
    values = require_env_vars(("APPLIBRARY_CATALOG_URL",))
    return RemoteCatalogConfig(
        url=values["APPLIBRARY_CATALOG_URL"],
        resilience=resilience
        or ResilienceConfig(name="catalog", timeout_seconds=CATALOG_TIMEOUT_SECONDS),
    )
