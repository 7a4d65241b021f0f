"""HTTP client for remote catalogs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from applibrary.adapters.http_resilience import ResilientClient
from applibrary.config.catalog import RemoteCatalogConfig, get_remote_catalog_config
from applibrary.domain.errors import CatalogUnavailableError

from .translator import parse_catalog_json

if TYPE_CHECKING:
    from collections.abc import Callable

    from applibrary.config.http_resilience import ResilienceConfig
    from applibrary.domain.model import Item
    from applibrary.domain.ports import CatalogSource

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpCatalogSource:
    config: RemoteCatalogConfig = field(default_factory=get_remote_catalog_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> tuple[Item, ...]:
        return asyncio.run(self._fetch_catalog_async())

    async def _fetch_catalog_async(self) -> tuple[Item, ...]:
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.get(self.config.url, headers={"Accept": "application/json"})
                response.raise_for_status()
            except httpx.HTTPError as exc:
                log.error(f"Catalog request to {self.config.url} failed: {exc}")
                raise CatalogUnavailableError(f"Cannot fetch catalog: {exc}") from exc

        items = parse_catalog_json(response.content)
        log.info("Fetched %s catalog items from %s", len(items), self.config.url)
        return items


if TYPE_CHECKING:
    _source_check: CatalogSource = HttpCatalogSource()
