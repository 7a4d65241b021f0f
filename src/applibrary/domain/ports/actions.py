"""Port for the log of install/uninstall actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from applibrary.domain.model import Action


type ActionSnapshot = Mapping[str, Action]


@runtime_checkable
class ActionLog(Protocol):
    """Live source of the current action per item identifier.

    ``observe_actions`` yields the current snapshot as soon as it is iterated and
    a complete new snapshot after every change. The stream does not end during
    normal operation; closing the iterator unsubscribes.
    """

    def observe_actions(self) -> AsyncIterator[ActionSnapshot]: ...


__all__ = ["ActionLog", "ActionSnapshot"]
