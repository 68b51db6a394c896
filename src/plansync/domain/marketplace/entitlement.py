"""Read-side entitlement query backed by the mirrored catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .policy import marketplace_plan_allows

if TYPE_CHECKING:
    from collections.abc import Callable

    from plansync.domain.model import Repo
    from plansync.domain.ports import MarketplaceUnitOfWork

    from .policy import MarketplacePlanDecision

log = getLogger(__name__)


def check_marketplace_plan(
    repo: Repo,
    *,
    unit_of_work_factory: Callable[[], MarketplaceUnitOfWork],
) -> MarketplacePlanDecision:
    """Look up the owner's current plan and evaluate the plan policy.

    Reads only; a concurrent sync iteration may be half applied, in which case the
    last committed plan reference is used.
    """

    with unit_of_work_factory() as uow:
        plan = uow.repositories.plans.find_by_account_login(repo.owner)

    decision = marketplace_plan_allows(repo, plan)
    log.debug(
        "Marketplace plan check for %s: plan=%s decision=%s",
        repo.full_name,
        plan.name if plan else None,
        decision,
    )
    return decision
