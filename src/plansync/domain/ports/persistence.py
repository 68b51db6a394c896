"""Ports for persisting marketplace plans and accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

    from plansync.domain.model import MarketplaceAccount, MarketplacePlan


@runtime_checkable
class MarketplacePlanRepository(Protocol):
    """Persistence contract for plans, keyed by ``github_id``."""

    def upsert(self, plan: MarketplacePlan) -> UUID:
        """Insert ``plan`` or overwrite name and description of the existing row.

        Returns the local id of the stored row, which is ``plan.id`` only on insert.
        """
        ...

    def get(self, plan_id: UUID) -> MarketplacePlan | None: ...

    def get_by_github_id(self, github_id: int) -> MarketplacePlan | None: ...

    def find_by_account_login(self, login: str) -> MarketplacePlan | None: ...


@runtime_checkable
class MarketplaceAccountRepository(Protocol):
    """Persistence contract for accounts, keyed by ``github_id``."""

    def upsert(self, account: MarketplaceAccount) -> UUID:
        """Insert ``account`` or overwrite plan reference and login of the existing row."""
        ...

    def get_by_github_id(self, github_id: int) -> MarketplaceAccount | None: ...

    def list_unsynchronized(
        self,
        synchronized_ids: Collection[UUID],
        *,
        excluded_plan_id: UUID,
    ) -> Sequence[MarketplaceAccount]: ...

    def delete(self, account_ids: Collection[UUID]) -> int: ...
