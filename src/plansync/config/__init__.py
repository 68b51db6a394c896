"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_float, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, default_github_resilience, get_github_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import LOG_LEVEL_ENV, configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import DEFAULT_SYNC_INTERVAL_SECONDS, SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_SYNC_INTERVAL_SECONDS",
    "LOG_LEVEL_ENV",
    "ConfigurationError",
    "DatabaseConfig",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "default_github_resilience",
    "env_flag",
    "env_float",
    "get_database_config",
    "get_github_config",
    "get_storage_config",
    "get_sync_config",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
