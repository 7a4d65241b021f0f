from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from applibrary.adapters.memory import InMemoryInstalledState
from applibrary.domain.catalog import Catalog
from applibrary.domain.library import (
    derive_cold_snapshot,
    merge_library,
    seed_from_catalog,
    sorted_snapshot,
)
from applibrary.domain.model import (
    NEVER_UPDATED,
    Action,
    ActionStatus,
    ActionType,
    EffectiveItem,
    InstalledPackage,
    Status,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from applibrary.domain.model import Item


def _action(identifier: str, action_type: ActionType, status: ActionStatus) -> Action:
    return Action(identifier=identifier, type=action_type, status=status)


def test_in_flight_install_and_installed_item(catalog: Catalog) -> None:
    seed = seed_from_catalog(catalog)
    actions = {"a": _action("a", ActionType.INSTALL, ActionStatus.COMMITTED)}
    state = InMemoryInstalledState({"b": 100})

    merged = merge_library(seed, actions, state)

    assert merged["a"].status is Status.INSTALLING
    assert merged["a"].updated_at == NEVER_UPDATED
    assert merged["b"].status is Status.INSTALLED
    assert merged["b"].updated_at == 100


def test_uninstall_success_overrides_installed_prior_state(catalog: Catalog) -> None:
    seed = sorted_snapshot(
        EffectiveItem(item=item, status=Status.INSTALLED, updated_at=100)
        for item in catalog.values()
    )
    actions = {"a": _action("a", ActionType.UNINSTALL, ActionStatus.SUCCESS)}
    state = InMemoryInstalledState({"a": 100})

    merged = merge_library(seed, actions, state)

    assert merged["a"].status is Status.UNINSTALLED
    assert merged["a"].updated_at == NEVER_UPDATED


def test_nothing_installed_and_no_actions_yields_defaults(catalog: Catalog) -> None:
    merged = merge_library(seed_from_catalog(catalog), {}, InMemoryInstalledState())

    assert all(entry.status is Status.UNINSTALLED for entry in merged.values())
    assert all(entry.updated_at == NEVER_UPDATED for entry in merged.values())


@pytest.mark.parametrize(
    "status",
    [ActionStatus.INITIALIZED, ActionStatus.PENDING_USER_ACTION, ActionStatus.COMMITTED],
)
@pytest.mark.parametrize(
    ("action_type", "expected"),
    [(ActionType.INSTALL, Status.INSTALLING), (ActionType.UNINSTALL, Status.UNINSTALLING)],
)
def test_in_flight_action_wins_over_installed_state(
    catalog: Catalog,
    status: ActionStatus,
    action_type: ActionType,
    expected: Status,
) -> None:
    seed = sorted_snapshot(
        EffectiveItem(item=item, status=Status.INSTALLED, updated_at=42)
        for item in catalog.values()
    )
    state = InMemoryInstalledState({"a": 500})

    merged = merge_library(seed, {"a": _action("a", action_type, status)}, state)

    assert merged["a"].status is expected
    assert merged["a"].updated_at == 42


@pytest.mark.parametrize(
    "status",
    [ActionStatus.FAILURE, ActionStatus.CANCELLATION, ActionStatus.UNKNOWN],
)
def test_terminal_actions_fall_through_to_installed_state(
    catalog: Catalog,
    status: ActionStatus,
) -> None:
    seed = seed_from_catalog(catalog)
    actions = {
        "a": _action("a", ActionType.INSTALL, status),
        "b": _action("b", ActionType.UNINSTALL, status),
    }
    state = InMemoryInstalledState({"b": 7})

    merged = merge_library(seed, actions, state)

    assert merged["a"] == seed["a"]
    assert merged["b"].status is Status.INSTALLED
    assert merged["b"].updated_at == 7


def test_install_success_defers_to_installed_state(catalog: Catalog) -> None:
    seed = seed_from_catalog(catalog)
    actions = {"a": _action("a", ActionType.INSTALL, ActionStatus.SUCCESS)}

    not_yet_visible = merge_library(seed, actions, InMemoryInstalledState())
    visible = merge_library(seed, actions, InMemoryInstalledState({"a": 1234}))

    assert not_yet_visible["a"].status is Status.UNINSTALLED
    assert visible["a"].status is Status.INSTALLED
    assert visible["a"].updated_at == 1234


def test_negative_lookup_keeps_prior_state(catalog: Catalog) -> None:
    seed = sorted_snapshot(
        [
            EffectiveItem(item=catalog["a"], status=Status.INSTALLED, updated_at=10),
            EffectiveItem(item=catalog["b"]),
        ]
    )

    merged = merge_library(seed, {}, InMemoryInstalledState())

    assert merged["a"].status is Status.INSTALLED
    assert merged["a"].updated_at == 10


def test_key_set_matches_catalog_and_ignores_unknown_actions(catalog: Catalog) -> None:
    actions = {"zzz": _action("zzz", ActionType.INSTALL, ActionStatus.COMMITTED)}
    state = InMemoryInstalledState({"not-in-catalog": 1})

    merged = merge_library(seed_from_catalog(catalog), actions, state)

    assert set(merged) == set(catalog)


def test_output_is_sorted_and_merge_is_idempotent(item_factory: Callable[[str], Item]) -> None:
    catalog = Catalog(item_factory(name) for name in ("delta", "alpha", "charlie", "bravo"))
    seed = seed_from_catalog(catalog)
    actions = {"charlie": _action("charlie", ActionType.INSTALL, ActionStatus.PENDING_USER_ACTION)}
    state = InMemoryInstalledState({"bravo": 3})

    first = merge_library(seed, actions, state)
    second = merge_library(seed, actions, state)

    assert list(first) == ["alpha", "bravo", "charlie", "delta"]
    assert dict(first) == dict(second)
    assert list(first) == list(second)


def test_published_mapping_is_read_only(catalog: Catalog) -> None:
    merged = merge_library(seed_from_catalog(catalog), {}, InMemoryInstalledState())

    with pytest.raises(TypeError):
        merged["a"] = EffectiveItem(item=catalog["a"])  # type: ignore[index]


def test_cold_snapshot_uses_scan_only(catalog: Catalog) -> None:
    installed = [
        InstalledPackage(identifier="b", updated_at=99),
        InstalledPackage(identifier="elsewhere", updated_at=5),
    ]

    snapshot = derive_cold_snapshot(catalog, installed)

    assert list(snapshot) == ["a", "b"]
    assert snapshot["a"].status is Status.UNINSTALLED
    assert snapshot["a"].updated_at == NEVER_UPDATED
    assert snapshot["b"].status is Status.INSTALLED
    assert snapshot["b"].updated_at == 99


def test_cold_snapshot_of_empty_scan_is_all_uninstalled(catalog: Catalog) -> None:
    snapshot = derive_cold_snapshot(catalog, [])

    assert dict(snapshot) == dict(seed_from_catalog(catalog))


def test_empty_catalog_yields_empty_mappings() -> None:
    empty = Catalog()
    actions = {"a": _action("a", ActionType.UNINSTALL, ActionStatus.COMMITTED)}
    state = InMemoryInstalledState({"a": 1})

    merged = merge_library(seed_from_catalog(empty), actions, state)
    cold = derive_cold_snapshot(empty, state.list_installed())

    assert dict(merged) == {}
    assert dict(cold) == {}
