"""Upsert remote plans and accounts into local storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plansync.domain.model import MarketplaceAccount, MarketplacePlan, discount_marketplace_plan

if TYPE_CHECKING:
    from uuid import UUID

    from plansync.domain.ports import (
        MarketplaceAccountRepository,
        MarketplacePlanRepository,
        RemoteAccount,
        RemotePlan,
    )


def synchronize_plan(plans: MarketplacePlanRepository, remote_plan: RemotePlan) -> UUID:
    """Mirror ``remote_plan`` locally and return its local id."""

    if remote_plan.github_id < 0:
        raise ValueError(f"Invalid plan id from Marketplace: {remote_plan.github_id}")
    return plans.upsert(
        MarketplacePlan(
            github_id=remote_plan.github_id,
            name=remote_plan.name,
            description=remote_plan.description,
        )
    )


def synchronize_account(
    accounts: MarketplaceAccountRepository,
    plan_id: UUID,
    remote_account: RemoteAccount,
) -> UUID:
    """Mirror ``remote_account`` under ``plan_id`` and return its local id.

    An existing account is moved to ``plan_id`` and gets its login refreshed, which
    is how plan changes on the Marketplace side show up locally.
    """

    return accounts.upsert(
        MarketplaceAccount(
            github_id=remote_account.github_id,
            github_login=remote_account.login,
            marketplace_plan_id=plan_id,
        )
    )


def fetch_discount_marketplace_plan(plans: MarketplacePlanRepository) -> MarketplacePlan:
    """Get or create the manually managed "Friends & Family" plan."""

    plan_id = plans.upsert(discount_marketplace_plan())
    plan = plans.get(plan_id)
    if plan is None:
        raise RuntimeError(f"Discount plan {plan_id} vanished after upsert")
    return plan
