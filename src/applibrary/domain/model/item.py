"""Catalog items and their reconciled library counterparts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .enums import Status

NEVER_UPDATED: Final[int] = -1
"""Timestamp sentinel for items that were never installed (or whose time is unknown)."""


@dataclass(frozen=True, slots=True)
class Item:
    """Entry of the store catalog."""

    identifier: str
    label: str
    publisher: str
    icon: str

    def __post_init__(self) -> None:
        if not self.identifier.strip():
            raise ValueError("Item identifier must not be blank")


@dataclass(frozen=True, slots=True)
class EffectiveItem:
    """Catalog item with its derived status and last update time (epoch millis)."""

    item: Item
    status: Status = Status.UNINSTALLED
    updated_at: int = NEVER_UPDATED

    @property
    def identifier(self) -> str:
        return self.item.identifier
