"""Domain port definitions for adapters."""

from __future__ import annotations

from .actions import ActionLog, ActionSnapshot
from .catalog import CatalogSource
from .installed_state import InstalledStateQuery

__all__ = [
    "ActionLog",
    "ActionSnapshot",
    "CatalogSource",
    "InstalledStateQuery",
]
