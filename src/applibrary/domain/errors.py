"""Error types raised by the library domain."""

from __future__ import annotations

from collections.abc import Iterable


class LibraryError(RuntimeError):
    """Base class for library reconciliation failures."""


class CatalogError(LibraryError):
    """Raised when catalog data is malformed."""


class DuplicateItemError(CatalogError):
    """Raised when the catalog lists the same identifier more than once."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        self.identifiers = tuple(sorted(set(identifiers)))
        super().__init__(f"Duplicate catalog identifiers: {', '.join(self.identifiers)}")


class CatalogUnavailableError(CatalogError):
    """Raised when a remote catalog cannot be fetched."""


class QueryUnavailableError(LibraryError):
    """Raised when the installed-state query cannot be reached."""


class ActionLogUnavailableError(LibraryError):
    """Raised when the action log cannot be subscribed to or stops streaming."""
