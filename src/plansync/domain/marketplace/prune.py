"""Removal of accounts the Marketplace no longer reports."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .reconcile import fetch_discount_marketplace_plan

if TYPE_CHECKING:
    from collections.abc import Collection
    from uuid import UUID

    from plansync.domain.ports import MarketplaceRepositories

log = getLogger(__name__)


def delete_unsynchronized(
    repositories: MarketplaceRepositories,
    synchronized_account_ids: Collection[UUID],
) -> int:
    """Delete every account outside ``synchronized_account_ids``.

    Accounts on the discount plan are kept: the Marketplace never lists them, so
    they only exist locally. Returns the number of deleted accounts.
    """

    discount_plan = fetch_discount_marketplace_plan(repositories.plans)
    unsynchronized = repositories.accounts.list_unsynchronized(
        synchronized_account_ids,
        excluded_plan_id=discount_plan.id,
    )

    log.info(f"Deleting {len(unsynchronized)} unsynchronized accounts")
    if not unsynchronized:
        return 0
    return repositories.accounts.delete([account.id for account in unsynchronized])
