"""Unit-of-work port: the transaction boundary around the repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from plansync.domain.ports.persistence import (
        MarketplaceAccountRepository,
        MarketplacePlanRepository,
    )


@dataclass(slots=True)
class MarketplaceRepositories:
    """Repositories sharing one transaction."""

    plans: MarketplacePlanRepository
    accounts: MarketplaceAccountRepository


@runtime_checkable
class MarketplaceUnitOfWork(Protocol):
    """Nothing is persisted until ``commit()``; leaving on an exception rolls back."""

    @property
    def repositories(self) -> MarketplaceRepositories: ...

    def __enter__(self) -> MarketplaceUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
