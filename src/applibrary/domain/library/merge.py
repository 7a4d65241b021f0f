"""Pure derivation of the library view from its three sources.

``merge_library`` recombines the engine's seed with the latest action snapshot;
``derive_cold_snapshot`` rebuilds the seed from a full installed-package scan.
Both return a read-only mapping ordered by identifier and keyed exactly like the
catalog they start from.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from applibrary.domain.model import NEVER_UPDATED, ActionType, EffectiveItem, Status

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from applibrary.domain.catalog import Catalog
    from applibrary.domain.model import Action, InstalledPackage
    from applibrary.domain.ports import ActionSnapshot, InstalledStateQuery


type LibrarySnapshot = Mapping[str, EffectiveItem]


def sorted_snapshot(entries: Iterable[EffectiveItem]) -> LibrarySnapshot:
    """Freeze ``entries`` into an identifier-ordered read-only mapping."""

    ordered = sorted(entries, key=lambda entry: entry.identifier)
    return MappingProxyType({entry.identifier: entry for entry in ordered})


def seed_from_catalog(catalog: Catalog) -> LibrarySnapshot:
    """Every catalog item with the default status (uninstalled, never updated)."""

    return sorted_snapshot(EffectiveItem(item=item) for item in catalog.values())


def derive_entry(
    entry: EffectiveItem,
    action: Action | None,
    installed_state: InstalledStateQuery,
) -> EffectiveItem:
    """Resolve the effective status of one item.

    An in-flight action wins over whatever the host reports. A completed
    uninstall is trusted over the host, which may still list the package.
    Everything else defers to the host lookup; a negative lookup keeps ``entry``.
    """

    if action is not None and action.in_flight:
        status = Status.INSTALLING if action.type is ActionType.INSTALL else Status.UNINSTALLING
        return replace(entry, status=status)

    if action is not None and action.completed_uninstall:
        return replace(entry, status=Status.UNINSTALLED, updated_at=NEVER_UPDATED)

    state = installed_state.is_installed(entry.identifier)
    if state.installed:
        return replace(entry, status=Status.INSTALLED, updated_at=state.updated_at)
    return entry


def merge_library(
    seed: LibrarySnapshot,
    actions: ActionSnapshot,
    installed_state: InstalledStateQuery,
) -> LibrarySnapshot:
    """Recombine ``seed`` with the current ``actions``.

    Actions for identifiers outside the seed are ignored. The function is
    deterministic for fixed inputs, but performs one installed-state lookup per
    item without an in-flight action, so it may block.
    """

    return sorted_snapshot(
        derive_entry(entry, actions.get(identifier), installed_state)
        for identifier, entry in seed.items()
    )


def derive_cold_snapshot(
    catalog: Catalog,
    installed: Iterable[InstalledPackage],
) -> LibrarySnapshot:
    """Status of every catalog item from a full scan alone, ignoring actions."""

    installed_by_identifier = {package.identifier: package for package in installed}
    entries: list[EffectiveItem] = []
    for identifier, item in catalog.items():
        package = installed_by_identifier.get(identifier)
        if package is None:
            entries.append(EffectiveItem(item=item))
        else:
            entries.append(
                EffectiveItem(item=item, status=Status.INSTALLED, updated_at=package.updated_at)
            )
    return sorted_snapshot(entries)


__all__ = [
    "LibrarySnapshot",
    "derive_cold_snapshot",
    "derive_entry",
    "merge_library",
    "seed_from_catalog",
    "sorted_snapshot",
]
