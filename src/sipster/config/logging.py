"""Shared logging helpers for Sipster."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "SIPSTER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(value: str | None, *, default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a ``logging`` level."""

    if value is None or not value.strip():
        return default
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        return default
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    Without an explicit ``level`` the ``SIPSTER_LOG_LEVEL`` environment variable is
    consulted, falling back to INFO. Pass ``force=True`` to reconfigure during tests.
    """

    effective_level = level if level is not None else resolve_log_level(
        os.getenv(LOG_LEVEL_ENV_VAR)
    )
    logging.basicConfig(
        level=effective_level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
