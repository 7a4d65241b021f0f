"""Values reported by the host about installed packages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .item import NEVER_UPDATED


@dataclass(frozen=True, slots=True)
class InstallState:
    """Answer to a point lookup: ``installed`` is true once a timestamp is known."""

    updated_at: int = NEVER_UPDATED

    @property
    def installed(self) -> bool:
        return self.updated_at > NEVER_UPDATED


NOT_INSTALLED: Final[InstallState] = InstallState()


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """One row of a full installed-package scan."""

    identifier: str
    updated_at: int
