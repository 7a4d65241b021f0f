"""The store catalog: the fixed universe of installable items."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from applibrary.domain.errors import DuplicateItemError
from applibrary.domain.model import Item

if TYPE_CHECKING:
    from collections.abc import Iterable

    from applibrary.domain.ports.catalog import CatalogSource

log = getLogger(__name__)

# Apps offered by the bundled store. A deployment would point the catalog at a
# file or a remote endpoint instead.
DEFAULT_CATALOG_ITEMS: tuple[Item, ...] = (
    Item(
        identifier="com.acme.spaceshooter",
        label="Space Shooter",
        publisher="ACME Inc.",
        icon="ic_app_spaceshooter",
    ),
    Item(
        identifier="com.champollion.pockettranslator",
        label="Pocket Translator",
        publisher="Champollion SA",
        icon="ic_app_pockettranslator",
    ),
    Item(
        identifier="com.echolabs.citymaker",
        label="City Maker",
        publisher="Echo Labs Ltd",
        icon="ic_app_citymaker",
    ),
    Item(
        identifier="com.paca.nicekart",
        label="Nice Kart",
        publisher="PACA SARL",
        icon="ic_app_nicekart",
    ),
)


class Catalog(Mapping[str, Item]):
    """Read-only mapping of identifier to item, iterated in identifier order."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Item] = ()) -> None:
        ordered = list(items)
        counts = Counter(item.identifier for item in ordered)
        duplicates = [identifier for identifier, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateItemError(duplicates)
        self._items: dict[str, Item] = {
            item.identifier: item for item in sorted(ordered, key=lambda i: i.identifier)
        }

    def __getitem__(self, identifier: str) -> Item:
        return self._items[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Catalog({list(self._items)!r})"


def load_catalog(source: CatalogSource | None = None) -> Catalog:
    """Build the catalog from ``source`` (or the bundled items).

    Raises ``DuplicateItemError`` when an identifier appears twice, and lets
    ``CatalogError`` from the source propagate.
    """

    items = tuple(source()) if source is not None else DEFAULT_CATALOG_ITEMS
    catalog = Catalog(items)
    log.info("Loaded catalog with %s items", len(catalog))
    return catalog


__all__ = ["DEFAULT_CATALOG_ITEMS", "Catalog", "load_catalog"]
