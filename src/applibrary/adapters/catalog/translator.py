"""Translate validated catalog payloads into domain items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from applibrary.domain.errors import CatalogError
from applibrary.domain.model import Item

from .schema import CatalogPayload

if TYPE_CHECKING:
    from .schema import ItemPayload


def parse_item(payload: ItemPayload) -> Item:
    return Item(
        identifier=payload.identifier,
        label=payload.label,
        publisher=payload.publisher,
        icon=payload.icon,
    )


def parse_catalog(document: object) -> tuple[Item, ...]:
    """Validate a decoded catalog document, raising ``CatalogError`` when malformed."""

    try:
        payload = CatalogPayload.model_validate(document)
    except ValidationError as exc:
        raise CatalogError(f"Malformed catalog document: {exc}") from exc
    return tuple(parse_item(item) for item in payload.items)


def parse_catalog_json(raw: str | bytes) -> tuple[Item, ...]:
    try:
        payload = CatalogPayload.model_validate_json(raw)
    except ValidationError as exc:
        raise CatalogError(f"Malformed catalog document: {exc}") from exc
    return tuple(parse_item(item) for item in payload.items)
