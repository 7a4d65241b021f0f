"""Installed-state query backed by an install root directory."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from applibrary.domain.errors import QueryUnavailableError
from applibrary.domain.model import NOT_INSTALLED, InstalledPackage, InstallState

if TYPE_CHECKING:
    import os
    from pathlib import Path

    from applibrary.domain.ports import InstalledStateQuery

log = getLogger(__name__)


def _mtime_millis(stat_result: os.stat_result) -> int:
    return stat_result.st_mtime_ns // 1_000_000


@dataclass(frozen=True, slots=True)
class DirectoryInstalledState:
    """Each sub-directory of ``root`` is an installed package named by its identifier.

    The directory modification time is the package's last update time. A missing
    root means nothing is installed; an unreadable root is reported as
    ``QueryUnavailableError``.
    """

    root: Path

    def is_installed(self, identifier: str) -> InstallState:
        if not identifier or "/" in identifier or "\\" in identifier or identifier in {".", ".."}:
            return NOT_INSTALLED
        path = self.root / identifier
        try:
            stat_result = path.stat()
        except OSError as exc:
            log.debug("Lookup for %s found nothing: %s", identifier, exc)
            return NOT_INSTALLED
        if not path.is_dir():
            return NOT_INSTALLED
        return InstallState(updated_at=_mtime_millis(stat_result))

    def list_installed(self) -> list[InstalledPackage]:
        if not self.root.exists():
            log.debug("Install root %s does not exist", self.root)
            return []
        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise QueryUnavailableError(f"Cannot scan install root {self.root}: {exc}") from exc

        packages: list[InstalledPackage] = []
        for entry in entries:
            # An uninstall may remove the directory while the scan runs.
            try:
                if not entry.is_dir():
                    continue
                stat_result = entry.stat()
            except (FileNotFoundError, NotADirectoryError):
                log.debug("Skipping %s, removed during scan", entry.name)
                continue
            except OSError as exc:
                raise QueryUnavailableError(f"Cannot read {entry}: {exc}") from exc
            packages.append(
                InstalledPackage(identifier=entry.name, updated_at=_mtime_millis(stat_result))
            )
        return packages


if TYPE_CHECKING:
    _query_check: InstalledStateQuery = DirectoryInstalledState(Path("."))
