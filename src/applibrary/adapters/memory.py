"""In-process adapters for the action log and installed-state ports."""

from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from applibrary.common.channel import LatestValueChannel
from applibrary.domain.errors import QueryUnavailableError
from applibrary.domain.model import NOT_INSTALLED, InstalledPackage, InstallState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable, Mapping

    from applibrary.domain.model import Action
    from applibrary.domain.ports import ActionLog, ActionSnapshot, InstalledStateQuery

log = getLogger(__name__)


class InMemoryActionLog:
    """Keeps the latest action per identifier and streams full snapshots.

    Mutations must happen on the event loop thread that iterates the streams.
    Subscribers that fall behind only see the newest snapshot.
    """

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self._actions: dict[str, Action] = {action.identifier: action for action in actions}
        self._subscribers: set[LatestValueChannel[ActionSnapshot]] = set()

    def snapshot(self) -> ActionSnapshot:
        return MappingProxyType(dict(self._actions))

    def record(self, action: Action) -> None:
        """Replace the current action for ``action.identifier``."""

        self._actions[action.identifier] = action
        log.debug("Recorded %s %s for %s", action.type, action.status, action.identifier)
        self._broadcast()

    def discard(self, identifier: str) -> None:
        if self._actions.pop(identifier, None) is not None:
            self._broadcast()

    async def observe_actions(self) -> AsyncIterator[ActionSnapshot]:
        channel: LatestValueChannel[ActionSnapshot] = LatestValueChannel()
        channel.send(self.snapshot())
        self._subscribers.add(channel)
        try:
            async for snapshot in channel:
                yield snapshot
        finally:
            self._subscribers.discard(channel)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _broadcast(self) -> None:
        snapshot = self.snapshot()
        for channel in self._subscribers:
            channel.send(snapshot)


class InMemoryInstalledState:
    """Mutable installed-state table, e.g. for previews and tests.

    Queries may run on a worker thread while the event loop mutates the table;
    each query reads a copy taken at its start.
    """

    def __init__(self, installed: Mapping[str, int] | None = None) -> None:
        self._installed: dict[str, int] = dict(installed or {})
        self.available = True

    def install(self, identifier: str, updated_at: int) -> None:
        self._installed[identifier] = updated_at

    def uninstall(self, identifier: str) -> None:
        self._installed.pop(identifier, None)

    def is_installed(self, identifier: str) -> InstallState:
        self._check_available()
        updated_at = self._installed.get(identifier)
        if updated_at is None:
            return NOT_INSTALLED
        return InstallState(updated_at=updated_at)

    def list_installed(self) -> list[InstalledPackage]:
        self._check_available()
        return [
            InstalledPackage(identifier=identifier, updated_at=updated_at)
            for identifier, updated_at in self._installed.copy().items()
        ]

    def _check_available(self) -> None:
        if not self.available:
            raise QueryUnavailableError("Installed-state table is offline")


if TYPE_CHECKING:
    _log_check: ActionLog = InMemoryActionLog()
    _query_check: InstalledStateQuery = InMemoryInstalledState()
