from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from plansync.domain.model import MarketplaceAccount, MarketplacePlan
from plansync.domain.ports import MarketplaceRepositories, RemoteAccount, RemotePlan

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Iterator, Sequence
    from types import TracebackType
    from uuid import UUID


def make_remote_plan(github_id: int, name: str | None = None, description: str = "") -> RemotePlan:
    return RemotePlan(
        github_id=github_id,
        name=name or f"Plan {github_id}",
        description=description,
    )


def make_remote_account(github_id: int, login: str | None = None) -> RemoteAccount:
    return RemoteAccount(github_id=github_id, login=login or f"user-{github_id}")


class ListingFailure(RuntimeError):
    """Raised by the fake listing to simulate a Marketplace outage."""


class FakeMarketplaceListing:
    """Serves a fixed catalog and records every call.

    ``fail_plans`` makes ``list_plans`` raise, ``fail_accounts_for`` makes
    ``list_accounts_for_plan`` raise for the given plan ids.
    """

    def __init__(
        self,
        catalog: Iterable[tuple[RemotePlan, Sequence[RemoteAccount]]] = (),
        *,
        fail_plans: bool = False,
        fail_accounts_for: Collection[int] = (),
    ) -> None:
        self.catalog: list[tuple[RemotePlan, list[RemoteAccount]]] = [
            (plan, list(accounts)) for plan, accounts in catalog
        ]
        self.fail_plans = fail_plans
        self.fail_accounts_for = set(fail_accounts_for)
        self.calls: list[tuple[str, int | None]] = []
        self.plan_fetches = threading.Event()
        self._active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def list_plans(self) -> list[RemotePlan]:
        with self._tracking():
            self.calls.append(("plans", None))
            self.plan_fetches.set()
            if self.fail_plans:
                raise ListingFailure("plans unavailable")
            return [plan for plan, _ in self.catalog]

    def list_accounts_for_plan(self, github_id: int) -> list[RemoteAccount]:
        with self._tracking():
            self.calls.append(("accounts", github_id))
            if github_id in self.fail_accounts_for:
                raise ListingFailure(f"accounts for plan {github_id} unavailable")
            for plan, accounts in self.catalog:
                if plan.github_id == github_id:
                    return list(accounts)
            return []

    @property
    def plan_fetch_count(self) -> int:
        return sum(1 for kind, _ in self.calls if kind == "plans")

    @contextmanager
    def _tracking(self) -> Iterator[None]:
        with self._lock:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            yield
        finally:
            with self._lock:
                self._active -= 1


class StorageFailure(RuntimeError):
    """Raised by the fake repositories to simulate a failing write."""


@dataclass(slots=True)
class FakeMarketplaceStore:
    """Committed state shared by every fake unit of work."""

    plans: dict[UUID, MarketplacePlan] = field(default_factory=dict)
    accounts: dict[UUID, MarketplaceAccount] = field(default_factory=dict)
    fail_account_github_ids: set[int] = field(default_factory=set)

    def plan_by_github_id(self, github_id: int) -> MarketplacePlan | None:
        return next((p for p in self.plans.values() if p.github_id == github_id), None)

    def account_by_github_id(self, github_id: int) -> MarketplaceAccount | None:
        return next((a for a in self.accounts.values() if a.github_id == github_id), None)


class FakePlanRepository:
    def __init__(self, store: FakeMarketplaceStore) -> None:
        self.store = store

    def upsert(self, plan: MarketplacePlan) -> UUID:
        existing = self.store.plan_by_github_id(plan.github_id)
        if existing is None:
            self.store.plans[plan.id] = replace(plan)
            return plan.id
        existing.name = plan.name
        existing.description = plan.description
        return existing.id

    def get(self, plan_id: UUID) -> MarketplacePlan | None:
        return self.store.plans.get(plan_id)

    def get_by_github_id(self, github_id: int) -> MarketplacePlan | None:
        return self.store.plan_by_github_id(github_id)

    def find_by_account_login(self, login: str) -> MarketplacePlan | None:
        matches = [a for a in self.store.accounts.values() if a.github_login == login]
        if not matches:
            return None
        account = min(matches, key=lambda a: a.github_id)
        return self.store.plans.get(account.marketplace_plan_id)


class FakeAccountRepository:
    def __init__(self, store: FakeMarketplaceStore) -> None:
        self.store = store

    def upsert(self, account: MarketplaceAccount) -> UUID:
        if account.github_id in self.store.fail_account_github_ids:
            raise StorageFailure(f"cannot store account {account.github_id}")
        if account.marketplace_plan_id not in self.store.plans:
            raise StorageFailure(f"unknown plan {account.marketplace_plan_id}")
        existing = self.store.account_by_github_id(account.github_id)
        if existing is None:
            self.store.accounts[account.id] = replace(account)
            return account.id
        existing.github_login = account.github_login
        existing.marketplace_plan_id = account.marketplace_plan_id
        return existing.id

    def get_by_github_id(self, github_id: int) -> MarketplaceAccount | None:
        return self.store.account_by_github_id(github_id)

    def list_unsynchronized(
        self,
        synchronized_ids: Collection[UUID],
        *,
        excluded_plan_id: UUID,
    ) -> list[MarketplaceAccount]:
        return [
            account
            for account in self.store.accounts.values()
            if account.id not in synchronized_ids
            and account.marketplace_plan_id != excluded_plan_id
        ]

    def delete(self, account_ids: Collection[UUID]) -> int:
        deleted = 0
        for account_id in account_ids:
            if self.store.accounts.pop(account_id, None) is not None:
                deleted += 1
        return deleted


if TYPE_CHECKING:
    from plansync.domain.ports import MarketplaceAccountRepository, MarketplacePlanRepository

    _plan_check: MarketplacePlanRepository = FakePlanRepository(FakeMarketplaceStore())
    _account_check: MarketplaceAccountRepository = FakeAccountRepository(FakeMarketplaceStore())


class FakeMarketplaceUnitOfWork:
    """Unit of work writing straight into a shared store and recording its outcome."""

    def __init__(self, store: FakeMarketplaceStore) -> None:
        self.repositories = MarketplaceRepositories(
            plans=FakePlanRepository(store),
            accounts=FakeAccountRepository(store),
        )
        self.committed = False
        self.rollback_called = False

    def __enter__(self) -> FakeMarketplaceUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rollback_called = True


class FakeUnitOfWorkFactory:
    """Callable handing out fake units of work over one store."""

    def __init__(self, store: FakeMarketplaceStore | None = None) -> None:
        self.store = store or FakeMarketplaceStore()
        self.created: list[FakeMarketplaceUnitOfWork] = []

    def __call__(self) -> FakeMarketplaceUnitOfWork:
        uow = FakeMarketplaceUnitOfWork(self.store)
        self.created.append(uow)
        return uow

    @property
    def commits(self) -> int:
        return sum(1 for uow in self.created if uow.committed)

    @property
    def rollbacks(self) -> int:
        return sum(1 for uow in self.created if uow.rollback_called)


if TYPE_CHECKING:
    from plansync.domain.ports import MarketplaceUnitOfWork

    _uow_check: MarketplaceUnitOfWork = FakeMarketplaceUnitOfWork(FakeMarketplaceStore())
