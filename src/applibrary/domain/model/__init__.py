"""Public domain model surface."""

from __future__ import annotations

from applibrary.domain.model.action import Action
from applibrary.domain.model.enums import IN_FLIGHT_STATUSES, ActionStatus, ActionType, Status
from applibrary.domain.model.installed import NOT_INSTALLED, InstalledPackage, InstallState
from applibrary.domain.model.item import NEVER_UPDATED, EffectiveItem, Item

__all__ = [
    "IN_FLIGHT_STATUSES",
    "NEVER_UPDATED",
    "NOT_INSTALLED",
    "Action",
    "ActionStatus",
    "ActionType",
    "EffectiveItem",
    "InstallState",
    "InstalledPackage",
    "Item",
    "Status",
]
