"""Marketplace catalog mirroring and plan entitlement rules."""

from __future__ import annotations

from .entitlement import check_marketplace_plan
from .policy import (
    PRIVATE_REPO_PLAN_GITHUB_IDS,
    MarketplacePlanAllows,
    MarketplacePlanDecision,
    MarketplacePlanForbids,
    MarketplacePlanLimitation,
    is_private_repo_plan,
    marketplace_plan_allows,
    when_marketplace_plan_forbids,
)
from .prune import delete_unsynchronized
from .reconcile import fetch_discount_marketplace_plan, synchronize_account, synchronize_plan
from .sync import (
    MarketplaceSyncError,
    SyncMarketplaceResult,
    SyncPhase,
    run_synchronize,
    synchronize_marketplace_plans,
)

__all__ = [
    "PRIVATE_REPO_PLAN_GITHUB_IDS",
    "MarketplacePlanAllows",
    "MarketplacePlanDecision",
    "MarketplacePlanForbids",
    "MarketplacePlanLimitation",
    "MarketplaceSyncError",
    "SyncMarketplaceResult",
    "SyncPhase",
    "check_marketplace_plan",
    "delete_unsynchronized",
    "fetch_discount_marketplace_plan",
    "is_private_repo_plan",
    "marketplace_plan_allows",
    "run_synchronize",
    "synchronize_account",
    "synchronize_marketplace_plans",
    "synchronize_plan",
    "when_marketplace_plan_forbids",
]
