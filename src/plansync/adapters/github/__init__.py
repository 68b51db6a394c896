"""Public interface for the GitHub Marketplace adapter."""

from __future__ import annotations

from .auth import github_app_jwt
from .client import GitHubMarketplaceClient, GitHubMarketplaceError, GitHubMarketplacePayloadError
from .schema import AccountPayload, PlanPayload
from .translator import parse_account, parse_plan

__all__ = [
    "AccountPayload",
    "GitHubMarketplaceClient",
    "GitHubMarketplaceError",
    "GitHubMarketplacePayloadError",
    "PlanPayload",
    "github_app_jwt",
    "parse_account",
    "parse_plan",
]
