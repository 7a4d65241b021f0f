from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from applibrary.adapters.memory import InMemoryActionLog, InMemoryInstalledState
from applibrary.domain.catalog import Catalog
from applibrary.domain.model import Item

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


def make_item(identifier: str) -> Item:
    return Item(
        identifier=identifier,
        label=identifier.upper(),
        publisher="Example Ltd",
        icon=f"ic_{identifier}",
    )


@pytest.fixture
def item_factory() -> Callable[[str], Item]:
    return make_item


@pytest.fixture
def catalog() -> Catalog:
    return Catalog([make_item("b"), make_item("a")])


@pytest.fixture
def installed_state() -> InMemoryInstalledState:
    return InMemoryInstalledState()


@pytest.fixture
def action_log() -> InMemoryActionLog:
    return InMemoryActionLog()


async def _wait_until(predicate: Callable[[], bool], *, timeout: float = 2.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.005)


@pytest.fixture
def wait_until() -> Callable[..., Awaitable[None]]:
    """Coroutine polling a predicate on the running loop until it holds."""

    return _wait_until
