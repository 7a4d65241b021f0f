"""Logging setup for the command line entry points."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

# httpx and httpcore log every request at INFO; the catalog fetch logs its own summary.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    ``level`` falls back to ``APPLIBRARY_LOG_LEVEL`` and then INFO. HTTP client
    chatter is capped at WARNING unless debugging. ``force=True`` replaces
    handlers installed by an earlier call.
    """

    effective = level if level is not None else _level_from_env()
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if effective > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _level_from_env() -> int:
    name = optional_env_var("APPLIBRARY_LOG_LEVEL")
    if name is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level {name!r} in APPLIBRARY_LOG_LEVEL")
    return level
