"""Lifecycle actions recorded against catalog items."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import IN_FLIGHT_STATUSES, ActionStatus, ActionType


@dataclass(frozen=True, slots=True)
class Action:
    """Current install/uninstall request for one item."""

    identifier: str
    type: ActionType
    status: ActionStatus

    @property
    def in_flight(self) -> bool:
        return self.status in IN_FLIGHT_STATUSES

    @property
    def completed_uninstall(self) -> bool:
        return self.type is ActionType.UNINSTALL and self.status is ActionStatus.SUCCESS
