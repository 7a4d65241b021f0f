"""Library view: reconciliation of catalog, action log, and installed state."""

from __future__ import annotations

from .merge import (
    LibrarySnapshot,
    derive_cold_snapshot,
    derive_entry,
    merge_library,
    seed_from_catalog,
    sorted_snapshot,
)
from .view import LibraryView

__all__ = [
    "LibrarySnapshot",
    "LibraryView",
    "derive_cold_snapshot",
    "derive_entry",
    "merge_library",
    "seed_from_catalog",
    "sorted_snapshot",
]
