"""Local storage locations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "applibrary"
INSTALL_DIR_NAME: Final[str] = "installed"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    install_root: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def resolve_install_root(self) -> Path:
        """Directory whose sub-directories are the installed packages."""

        if self.install_root is not None:
            return self.install_root.expanduser().resolve()
        return self.resolve_data_dir() / INSTALL_DIR_NAME


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("APPLIBRARY_DATA_DIR")
    env_root = optional_env_var("APPLIBRARY_INSTALL_ROOT")
    return StorageConfig(
        data_dir=Path(env_dir) if env_dir else _default_data_dir(),
        install_root=Path(env_root) if env_root else None,
    )
