"""Catalog source backed by a local JSON document."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from applibrary.domain.errors import CatalogError

from .translator import parse_catalog_json

if TYPE_CHECKING:
    from pathlib import Path

    from applibrary.domain.model import Item
    from applibrary.domain.ports import CatalogSource

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JsonFileCatalogSource:
    path: Path

    def __call__(self) -> tuple[Item, ...]:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise CatalogError(f"Cannot read catalog file {self.path}: {exc}") from exc
        items = parse_catalog_json(raw)
        log.debug("Read %s catalog items from %s", len(items), self.path)
        return items


if TYPE_CHECKING:
    _source_check: CatalogSource = JsonFileCatalogSource(Path("catalog.json"))
