"""HTTP client for the GitHub Marketplace listing API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from plansync.adapters.http_resilience import ResilienceConfig, ResilientClient
from plansync.config import GitHubConfig, get_github_config
from plansync.config.github import DEFAULT_GITHUB_API_URL

from .auth import github_app_jwt
from .schema import AccountListAdapter, PlanListAdapter
from .translator import parse_account, parse_plan

if TYPE_CHECKING:
    from collections.abc import Callable

    from plansync.domain.ports import MarketplaceListing, RemoteAccount, RemotePlan

log = getLogger(__name__)

PER_PAGE: Final[int] = 100


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class GitHubMarketplaceError(RuntimeError):
    """Raised when the Marketplace listing cannot be read."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubMarketplacePayloadError(GitHubMarketplaceError):
    """Raised when a Marketplace response does not have the expected shape."""


@dataclass(slots=True)
class GitHubMarketplaceClient:
    """Reads plans and their accounts, authenticating as the GitHub App."""

    config: GitHubConfig = field(default_factory=get_github_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def list_plans(self) -> list[RemotePlan]:
        payloads = asyncio.run(self._fetch_all(self._listing_path("plans")))
        try:
            plans = PlanListAdapter.validate_python(payloads)
        except ValidationError as exc:
            raise GitHubMarketplacePayloadError(f"Unexpected plan payload: {exc}") from exc
        return [parse_plan(plan) for plan in plans]

    def list_accounts_for_plan(self, github_id: int) -> list[RemoteAccount]:
        path = self._listing_path(f"plans/{github_id}/accounts")
        payloads = asyncio.run(self._fetch_all(path))
        try:
            accounts = AccountListAdapter.validate_python(payloads)
        except ValidationError as exc:
            raise GitHubMarketplacePayloadError(
                f"Unexpected account payload for plan {github_id}: {exc}"
            ) from exc
        return [parse_account(account) for account in accounts]

    def _listing_path(self, suffix: str) -> str:
        prefix = "/marketplace_listing"
        if self.config.stub_marketplace_listing:
            prefix = f"{prefix}/stubbed"
        return f"{prefix}/{suffix}"

    def _auth_headers(self) -> dict[str, str]:
        token = github_app_jwt(self.config.app_id, self.config.app_key)
        return {"Authorization": f"Bearer {token}"}

    async def _fetch_all(self, path: str) -> list[object]:
        """Collect every page of a list endpoint by following ``Link: rel="next"``."""

        base_url = (self.config.resilience.base_url or DEFAULT_GITHUB_API_URL).rstrip("/")
        url: str | None = f"{base_url}{path}"
        params: dict[str, int] | None = {"per_page": PER_PAGE}
        items: list[object] = []

        async with self.client_factory(self.config.resilience) as client:
            while url is not None:
                response = await self._perform_request(client=client, url=url, params=params)
                payload = self._decode(response)
                items.extend(payload)
                url = response.links.get("next", {}).get("url")
                params = None  # the next link already carries the query

        log.debug(f"Fetched {len(items)} items from {path}")
        return items

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        url: str,
        params: dict[str, int] | None,
    ) -> httpx.Response:
        try:
            response = await client.get(url, params=params, headers=self._auth_headers())
        except httpx.HTTPError as exc:
            raise GitHubMarketplaceError(f"GitHub request failed for {url}: {exc}") from exc

        if response.is_error:
            log.error(f"GitHub API error {response.status_code} for {url}: {response.text}")
            raise GitHubMarketplaceError(
                f"GitHub responded {response.status_code} for {url}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> list[object]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise GitHubMarketplacePayloadError(
                f"Invalid JSON from {response.request.url}"
            ) from exc
        if not isinstance(payload, list):
            raise GitHubMarketplacePayloadError(
                f"Expected a list from {response.request.url}, got {type(payload).__name__}"
            )
        return payload


if TYPE_CHECKING:
    _listing_check: MarketplaceListing = GitHubMarketplaceClient()
