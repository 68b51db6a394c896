"""Root logger setup for the plansync worker."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_LEVEL_ENV: Final[str] = "PLANSYNC_LOG_LEVEL"

# httpx logs every request at INFO; one sync iteration issues one per plan.
_CHATTY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def resolve_log_level(default: int = logging.INFO) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level for {LOG_LEVEL_ENV}: {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``PLANSYNC_LOG_LEVEL`` (INFO when unset). Pass ``force=True``
    to reconfigure an already configured root logger.
    """

    logging.basicConfig(
        level=resolve_log_level() if level is None else level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
