"""Synchronization defaults for the marketplace loop."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .env import env_float
from .errors import ConfigurationError

DEFAULT_SYNC_INTERVAL_SECONDS = 5 * 60.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS


def get_sync_config() -> SyncConfig:
    interval = env_float("MARKETPLACE_SYNC_INTERVAL_SECONDS", default=DEFAULT_SYNC_INTERVAL_SECONDS)
    if not math.isfinite(interval) or interval < 0:
        raise ConfigurationError(
            "MARKETPLACE_SYNC_INTERVAL_SECONDS must be a finite, non-negative number"
        )
    return SyncConfig(interval_seconds=interval)
