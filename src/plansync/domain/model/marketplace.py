"""Marketplace plans and the accounts subscribed to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from plansync.domain.model.entity import Entity

if TYPE_CHECKING:
    from uuid import UUID

DISCOUNT_PLAN_GITHUB_ID: Final[int] = 0
DISCOUNT_PLAN_NAME: Final[str] = "Friends & Family"
DISCOUNT_PLAN_DESCRIPTION: Final[str] = "Manually managed discount plan"


@dataclass(eq=False, kw_only=True)
class MarketplacePlan(Entity):
    """A billing tier mirrored from the Marketplace listing.

    ``github_id`` is the natural key; the local ``id`` never changes once assigned.
    """

    github_id: int
    name: str
    description: str

    @property
    def is_discount_plan(self) -> bool:
        return self.github_id == DISCOUNT_PLAN_GITHUB_ID


@dataclass(eq=False, kw_only=True)
class MarketplaceAccount(Entity):
    """A Marketplace subscriber linked to exactly one plan."""

    github_id: int
    github_login: str
    marketplace_plan_id: UUID


def discount_marketplace_plan() -> MarketplacePlan:
    """Build the manually managed plan that the prune pass never touches."""

    return MarketplacePlan(
        github_id=DISCOUNT_PLAN_GITHUB_ID,
        name=DISCOUNT_PLAN_NAME,
        description=DISCOUNT_PLAN_DESCRIPTION,
    )
