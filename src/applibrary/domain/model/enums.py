"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """Effective install state of a catalog item."""

    INSTALLED = "installed"
    INSTALLING = "installing"
    UNINSTALLING = "uninstalling"
    UNINSTALLED = "uninstalled"


class ActionType(StrEnum):
    INSTALL = "install"
    UNINSTALL = "uninstall"


class ActionStatus(StrEnum):
    """Lifecycle of an install or uninstall request."""

    INITIALIZED = "initialized"
    PENDING_USER_ACTION = "pending_user_action"
    COMMITTED = "committed"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLATION = "cancellation"
    UNKNOWN = "unknown"


IN_FLIGHT_STATUSES: frozenset[ActionStatus] = frozenset(
    {ActionStatus.INITIALIZED, ActionStatus.PENDING_USER_ACTION, ActionStatus.COMMITTED}
)
