"""Public interface for the catalog adapters."""

from __future__ import annotations

from .client import HttpCatalogSource
from .file import JsonFileCatalogSource
from .schema import CatalogPayload, ItemPayload
from .translator import parse_catalog, parse_catalog_json, parse_item

__all__ = [
    "CatalogPayload",
    "HttpCatalogSource",
    "ItemPayload",
    "JsonFileCatalogSource",
    "parse_catalog",
    "parse_catalog_json",
    "parse_item",
]
