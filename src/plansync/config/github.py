"""GitHub App configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_flag, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_TIMEOUT_SECONDS = 30.0
GITHUB_API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class GitHubConfig:
    """Holds the GitHub App credentials used to read the Marketplace listing."""

    app_id: int
    app_key: str
    resilience: ResilienceConfig
    stub_marketplace_listing: bool = False

    def __repr__(self) -> str:
        return (
            f"GitHubConfig(app_id={self.app_id}, app_key=<redacted>, "
            f"stub_marketplace_listing={self.stub_marketplace_listing})"
        )


def default_github_resilience(base_url: str = DEFAULT_GITHUB_API_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="github",
        base_url=base_url,
        timeout_seconds=GITHUB_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": "plansync",
        },
    )


def get_github_config(*, resilience: ResilienceConfig | None = None) -> GitHubConfig:
    values = require_env_vars(("GITHUB_APP_ID", "GITHUB_APP_KEY"))
    try:
        app_id = int(values["GITHUB_APP_ID"])
    except ValueError as exc:
        raise ConfigurationError(
            f"GITHUB_APP_ID must be an integer, got {values['GITHUB_APP_ID']!r}"
        ) from exc

    base_url = os.getenv("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL
    return GitHubConfig(
        app_id=app_id,
        app_key=values["GITHUB_APP_KEY"].replace("\\n", "\n"),
        resilience=resilience or default_github_resilience(base_url),
        stub_marketplace_listing=env_flag("STUB_MARKETPLACE_LISTING"),
    )
