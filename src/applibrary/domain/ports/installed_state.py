"""Port for querying what the host has installed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from applibrary.domain.model import InstalledPackage, InstallState


@runtime_checkable
class InstalledStateQuery(Protocol):
    """Installed-state lookups against the host system.

    Both calls may block. An unknown identifier is a normal negative answer
    (``NOT_INSTALLED``), never an error. Implementations raise
    ``QueryUnavailableError`` when the host cannot be queried at all.
    """

    def is_installed(self, identifier: str) -> InstallState: ...

    def list_installed(self) -> Iterable[InstalledPackage]: ...


__all__ = ["InstalledStateQuery"]
