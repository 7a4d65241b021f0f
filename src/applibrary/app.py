"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from applibrary.adapters.catalog import HttpCatalogSource, JsonFileCatalogSource
from applibrary.adapters.installed_state import DirectoryInstalledState
from applibrary.adapters.memory import InMemoryActionLog
from applibrary.config import get_catalog_config, get_remote_catalog_config, get_storage_config
from applibrary.domain.catalog import load_catalog
from applibrary.domain.library import LibraryView

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from applibrary.domain.catalog import Catalog
    from applibrary.domain.library import LibrarySnapshot
    from applibrary.domain.model import Action
    from applibrary.domain.ports import ActionLog, CatalogSource, InstalledStateQuery


log = getLogger(__name__)


def build_catalog_source(
    *,
    catalog_path: Path | None = None,
    remote: bool = False,
) -> CatalogSource | None:
    """Pick the catalog source; ``None`` means the bundled catalog."""

    if remote:
        return HttpCatalogSource(get_remote_catalog_config())
    path = catalog_path or get_catalog_config().path
    if path is not None:
        return JsonFileCatalogSource(path)
    return None


def build_installed_state(*, install_root: Path | None = None) -> InstalledStateQuery:
    root = install_root or get_storage_config().resolve_install_root()
    return DirectoryInstalledState(root)


def open_library_view(
    *,
    catalog: Catalog | None = None,
    action_log: ActionLog | None = None,
    installed_state: InstalledStateQuery | None = None,
) -> LibraryView:
    """Construct a library view; the caller owns it and must start and close it."""

    return LibraryView(
        catalog if catalog is not None else load_catalog(),
        action_log=action_log if action_log is not None else InMemoryActionLog(),
        installed_state=installed_state if installed_state is not None else build_installed_state(),
    )


def show_library(
    *,
    catalog_source: CatalogSource | None = None,
    installed_state: InstalledStateQuery | None = None,
    actions: Iterable[Action] = (),
) -> LibrarySnapshot:
    """Reconcile the catalog once: cold refresh merged with ``actions``."""

    catalog = load_catalog(catalog_source)
    effective_state = installed_state if installed_state is not None else build_installed_state()
    action_log = InMemoryActionLog(actions)
    log.info(
        "Reconciling library: catalog=%s items, actions=%s",
        len(catalog),
        len(action_log.snapshot()),
    )
    return asyncio.run(_show_library_async(catalog, action_log, effective_state))


async def _show_library_async(
    catalog: Catalog,
    action_log: ActionLog,
    installed_state: InstalledStateQuery,
) -> LibrarySnapshot:
    view = open_library_view(
        catalog=catalog,
        action_log=action_log,
        installed_state=installed_state,
    )
    async with view:
        return await view.refresh()
