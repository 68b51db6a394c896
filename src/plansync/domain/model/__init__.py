"""Public domain model surface."""

from __future__ import annotations

from plansync.domain.model.entity import Entity, new_id
from plansync.domain.model.marketplace import (
    DISCOUNT_PLAN_DESCRIPTION,
    DISCOUNT_PLAN_GITHUB_ID,
    DISCOUNT_PLAN_NAME,
    MarketplaceAccount,
    MarketplacePlan,
    discount_marketplace_plan,
)
from plansync.domain.model.repo import Repo

__all__ = [
    "DISCOUNT_PLAN_DESCRIPTION",
    "DISCOUNT_PLAN_GITHUB_ID",
    "DISCOUNT_PLAN_NAME",
    "Entity",
    "MarketplaceAccount",
    "MarketplacePlan",
    "Repo",
    "discount_marketplace_plan",
    "new_id",
]
