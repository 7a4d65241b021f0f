"""Port for catalog sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from applibrary.domain.model import Item


@runtime_checkable
class CatalogSource(Protocol):
    """Callable returning the catalog entries in any order."""

    def __call__(self) -> Iterable[Item]: ...


__all__ = ["CatalogSource"]
