"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import MarketplaceListing, RemoteAccount, RemotePlan
from .persistence import MarketplaceAccountRepository, MarketplacePlanRepository
from .unit_of_work import MarketplaceRepositories, MarketplaceUnitOfWork

__all__ = [
    "MarketplaceAccountRepository",
    "MarketplaceListing",
    "MarketplacePlanRepository",
    "MarketplaceRepositories",
    "MarketplaceUnitOfWork",
    "RemoteAccount",
    "RemotePlan",
]
