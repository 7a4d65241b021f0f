"""Live reconciliation engine publishing the library view."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from applibrary.common.channel import LatestValueChannel
from applibrary.domain.errors import ActionLogUnavailableError, QueryUnavailableError
from applibrary.domain.model import Status

from .merge import derive_cold_snapshot, merge_library, seed_from_catalog

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping
    from types import TracebackType

    from applibrary.domain.catalog import Catalog
    from applibrary.domain.model import Action, InstalledPackage
    from applibrary.domain.ports import ActionLog, ActionSnapshot, InstalledStateQuery

    from .merge import LibrarySnapshot

log = getLogger(__name__)


class LibraryView:
    """Reconcile the catalog with the action log and the host's installed state.

    The view keeps a *seed* (the catalog, later replaced by cold refreshes) and
    the latest action snapshot. Whenever either changes it re-merges them and
    publishes a complete, read-only mapping to every observer. Publications are
    serialized, so readers only ever see whole mappings.

    Use it as an async context manager, or call ``start`` and ``aclose``::

        async with LibraryView(catalog, action_log=log, installed_state=query) as view:
            await view.refresh()
            async for library in view.observe():
                ...
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        action_log: ActionLog,
        installed_state: InstalledStateQuery,
    ) -> None:
        self._catalog = catalog
        self._action_log = action_log
        self._installed_state = installed_state

        self._seed: LibrarySnapshot = seed_from_catalog(catalog)
        self._actions: ActionSnapshot = MappingProxyType({})
        self._published: LibrarySnapshot = self._seed

        self._observers: set[LatestValueChannel[LibrarySnapshot]] = set()
        self._publish_lock = asyncio.Lock()
        self._refresh_lock = asyncio.Lock()
        self._pump: asyncio.Task[None] | None = None
        self._failure: ActionLogUnavailableError | None = None
        self._closed = False

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def current(self) -> LibrarySnapshot:
        """The last published mapping."""

        return self._published

    @property
    def running(self) -> bool:
        return self._pump is not None and not self._pump.done()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def start(self) -> None:
        """Subscribe to the action log and publish the first merged mapping.

        Raises ``ActionLogUnavailableError`` if the subscription cannot be set up
        or closes before its first snapshot.
        """

        self._check_open()
        if self._pump is not None:
            raise RuntimeError("LibraryView already started")

        try:
            stream = self._action_log.observe_actions()
            first = await anext(stream)
        except StopAsyncIteration:
            msg = "Action log closed before its first snapshot"
            raise ActionLogUnavailableError(msg) from None
        except ActionLogUnavailableError:
            raise
        except Exception as exc:
            raise ActionLogUnavailableError(f"Cannot subscribe to action log: {exc}") from exc

        try:
            await self._apply_actions(first)
        except BaseException:
            await _close_stream(stream)
            raise

        self._pump = asyncio.create_task(self._consume(stream), name="library-view-actions")
        log.info("Library view started with %s catalog items", len(self._catalog))

    async def aclose(self) -> None:
        """Stop consuming actions and end every ``observe`` iteration."""

        if self._closed:
            return
        self._closed = True
        if self._pump is not None:
            self._pump.cancel()
            try:
                await self._pump
            except asyncio.CancelledError:
                pass
        for channel in self._observers:
            channel.close()
        self._observers.clear()
        log.info("Library view closed")

    async def observe(self) -> AsyncIterator[LibrarySnapshot]:
        """Yield the current mapping, then each newer one.

        A slow consumer skips intermediate mappings and receives the latest.
        If the action log fails, the last good mapping is followed by
        ``ActionLogUnavailableError``.
        """

        channel: LatestValueChannel[LibrarySnapshot] = LatestValueChannel()
        channel.send(self._published)
        if self._failure is not None:
            channel.fail(self._failure)
        elif self._closed:
            channel.close()
        else:
            self._observers.add(channel)
        try:
            async for snapshot in channel:
                yield snapshot
        finally:
            self._observers.discard(channel)

    async def refresh(self) -> LibrarySnapshot:
        """Rebuild the seed from a full installed-package scan and republish.

        The scan ignores actions; the published mapping is the new seed merged
        with the latest action snapshot. Concurrent calls run one after another.
        ``QueryUnavailableError`` propagates and leaves the current mapping in
        place, as does cancelling before the result is committed.
        Raises ``RuntimeError`` once the view is closed.
        """

        self._check_open()
        async with self._refresh_lock:
            installed = await asyncio.to_thread(self._scan_installed)
            cold_seed = derive_cold_snapshot(self._catalog, installed)
            async with self._publish_lock:
                merged = await asyncio.to_thread(
                    merge_library, cold_seed, self._actions, self._installed_state
                )
                self._check_open()
                self._seed = cold_seed
                self._publish(merged)
            log.info(
                "Refreshed library: %s of %s catalog items installed",
                sum(1 for entry in cold_seed.values() if entry.status is Status.INSTALLED),
                len(cold_seed),
            )
            return merged

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("LibraryView has been closed")

    def _scan_installed(self) -> list[InstalledPackage]:
        return list(self._installed_state.list_installed())

    async def _apply_actions(self, snapshot: Mapping[str, Action]) -> None:
        async with self._publish_lock:
            self._actions = MappingProxyType(dict(snapshot))
            merged = await asyncio.to_thread(
                merge_library, self._seed, self._actions, self._installed_state
            )
            self._publish(merged)

    async def _consume(self, stream: AsyncIterator[ActionSnapshot]) -> None:
        try:
            async for snapshot in stream:
                try:
                    await self._apply_actions(snapshot)
                except QueryUnavailableError as exc:
                    log.warning(f"Installed-state query unavailable, keeping last library: {exc}")
            self._fail(ActionLogUnavailableError("Action log stream ended"))
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            log.exception("Action log stream failed")
            failure = ActionLogUnavailableError(f"Action log stream failed: {exc}")
            failure.__cause__ = exc
            self._fail(failure)
        finally:
            await _close_stream(stream)

    def _publish(self, snapshot: LibrarySnapshot) -> None:
        self._published = snapshot
        for channel in self._observers:
            channel.send(snapshot)
        log.debug("Published library with %s items", len(snapshot))

    def _fail(self, failure: ActionLogUnavailableError) -> None:
        self._failure = failure
        for channel in self._observers:
            channel.fail(failure)
        self._observers.clear()


async def _close_stream(stream: AsyncIterator[ActionSnapshot]) -> None:
    if isinstance(stream, AsyncGenerator):
        await stream.aclose()


__all__ = ["LibraryView"]
