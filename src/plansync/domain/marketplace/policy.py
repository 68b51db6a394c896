"""Decide what a repository owner's Marketplace plan allows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final, TypeAlias

from plansync.domain.model import DISCOUNT_PLAN_GITHUB_ID

if TYPE_CHECKING:
    from collections.abc import Callable

    from plansync.domain.model import MarketplacePlan, Repo

EARLY_ADOPTER_PLAN_GITHUB_ID: Final[int] = 2178
PRO_PLAN_GITHUB_ID: Final[int] = 2553

# Plans whose subscribers may use private repositories. Exact ids, never ranges.
PRIVATE_REPO_PLAN_GITHUB_IDS: Final[frozenset[int]] = frozenset(
    {
        DISCOUNT_PLAN_GITHUB_ID,  # manually managed "Friends & Family"
        EARLY_ADOPTER_PLAN_GITHUB_ID,  # temporary "Early Adopter"
        PRO_PLAN_GITHUB_ID,  # "Pro"
    }
)


class MarketplacePlanLimitation(StrEnum):
    PLAN_NOT_FOUND = "plan-not-found"
    PLAN_PUBLIC_ONLY = "plan-public-only"


@dataclass(frozen=True, slots=True)
class MarketplacePlanAllows:
    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class MarketplacePlanForbids:
    limitation: MarketplacePlanLimitation

    @property
    def allowed(self) -> bool:
        return False


MarketplacePlanDecision: TypeAlias = MarketplacePlanAllows | MarketplacePlanForbids


def is_private_repo_plan(plan: MarketplacePlan) -> bool:
    return plan.github_id in PRIVATE_REPO_PLAN_GITHUB_IDS


def marketplace_plan_allows(repo: Repo, plan: MarketplacePlan | None) -> MarketplacePlanDecision:
    """Current, naive plan limitations: private repositories need a paid plan."""

    if not repo.is_private:
        return MarketplacePlanAllows()
    if plan is None:
        return MarketplacePlanForbids(MarketplacePlanLimitation.PLAN_NOT_FOUND)
    if is_private_repo_plan(plan):
        return MarketplacePlanAllows()
    return MarketplacePlanForbids(MarketplacePlanLimitation.PLAN_PUBLIC_ONLY)


def when_marketplace_plan_forbids(
    decision: MarketplacePlanDecision,
    callback: Callable[[MarketplacePlanLimitation], None],
) -> None:
    if isinstance(decision, MarketplacePlanForbids):
        callback(decision.limitation)
