"""Mirror the Marketplace catalog into local storage, forever."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from .prune import delete_unsynchronized
from .reconcile import synchronize_account, synchronize_plan

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from uuid import UUID

    from plansync.domain.ports import (
        MarketplaceListing,
        MarketplaceRepositories,
        MarketplaceUnitOfWork,
    )

UnitOfWorkFactory: TypeAlias = "Callable[[], MarketplaceUnitOfWork]"
T = TypeVar("T")

log = getLogger(__name__)


class SyncPhase(StrEnum):
    FETCH_PLANS = "fetch-plans"
    RECONCILE_PLAN = "reconcile-plan"
    FETCH_ACCOUNTS = "fetch-accounts"
    RECONCILE_ACCOUNT = "reconcile-account"
    PRUNE = "prune"


class MarketplaceSyncError(RuntimeError):
    """Raised when one synchronization iteration is abandoned."""

    def __init__(
        self,
        phase: SyncPhase,
        *,
        plan_github_id: int | None = None,
        account_github_id: int | None = None,
    ) -> None:
        details = [f"phase={phase}"]
        if plan_github_id is not None:
            details.append(f"plan={plan_github_id}")
        if account_github_id is not None:
            details.append(f"account={account_github_id}")
        super().__init__(f"Marketplace synchronization failed ({', '.join(details)})")
        self.phase = phase
        self.plan_github_id = plan_github_id
        self.account_github_id = account_github_id


@dataclass(slots=True)
class SyncMarketplaceResult:
    """Outcome of one synchronization iteration."""

    plans: int
    accounts: int
    deleted: int


@contextmanager
def _sync_phase(
    phase: SyncPhase,
    *,
    plan_github_id: int | None = None,
    account_github_id: int | None = None,
) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        raise MarketplaceSyncError(
            phase,
            plan_github_id=plan_github_id,
            account_github_id=account_github_id,
        ) from exc


def _commit(
    unit_of_work_factory: UnitOfWorkFactory,
    operation: Callable[[MarketplaceRepositories], T],
) -> T:
    with unit_of_work_factory() as uow:
        result = operation(uow.repositories)
        uow.commit()
    return result


def run_synchronize(
    *,
    listing: MarketplaceListing,
    unit_of_work_factory: UnitOfWorkFactory,
) -> SyncMarketplaceResult:
    """Run one fetch, reconcile and prune iteration.

    Every upsert commits on its own, so a failure part way through leaves earlier
    plans and accounts in place and skips the prune. The next iteration redoes the
    same idempotent upserts and finishes the job.
    """

    log.info("Synchronizing GitHub Marketplace data")
    with _sync_phase(SyncPhase.FETCH_PLANS):
        plans = list(listing.list_plans())

    log.info(f"Synchronizing {len(plans)} plans")
    # One set across all plans: an account that moved plans earlier in this
    # iteration must not look unsynchronized to the prune.
    synchronized_account_ids: set[UUID] = set()
    for remote_plan in plans:
        with _sync_phase(SyncPhase.RECONCILE_PLAN, plan_github_id=remote_plan.github_id):
            plan_id = _commit(
                unit_of_work_factory,
                lambda repositories, plan=remote_plan: synchronize_plan(repositories.plans, plan),
            )

        with _sync_phase(SyncPhase.FETCH_ACCOUNTS, plan_github_id=remote_plan.github_id):
            accounts = list(listing.list_accounts_for_plan(remote_plan.github_id))

        log.info(f"Synchronizing {len(accounts)} accounts with plan {remote_plan.name!r}")
        for remote_account in accounts:
            with _sync_phase(
                SyncPhase.RECONCILE_ACCOUNT,
                plan_github_id=remote_plan.github_id,
                account_github_id=remote_account.github_id,
            ):
                account_id = _commit(
                    unit_of_work_factory,
                    lambda repositories, account=remote_account: synchronize_account(
                        repositories.accounts, plan_id, account
                    ),
                )
            synchronized_account_ids.add(account_id)

    with _sync_phase(SyncPhase.PRUNE):
        deleted = _commit(
            unit_of_work_factory,
            lambda repositories: delete_unsynchronized(repositories, synchronized_account_ids),
        )

    log.info("GitHub Marketplace data synchronized")
    return SyncMarketplaceResult(
        plans=len(plans),
        accounts=len(synchronized_account_ids),
        deleted=deleted,
    )


def synchronize_marketplace_plans(
    *,
    listing: MarketplaceListing,
    unit_of_work_factory: UnitOfWorkFactory,
    interval_seconds: float,
    stop_event: threading.Event | None = None,
) -> int:
    """Synchronize every ``interval_seconds`` until ``stop_event`` is set.

    Failures are logged and retried on the next tick. Setting ``stop_event`` cuts
    the wait short but never interrupts an iteration in flight. Returns the number
    of iterations run.
    """

    stop = stop_event or threading.Event()
    iterations = 0
    log.info(f"Starting Marketplace synchronization loop: interval={interval_seconds}s")
    while not stop.is_set():
        try:
            run_synchronize(listing=listing, unit_of_work_factory=unit_of_work_factory)
        except Exception:
            log.exception("Marketplace synchronization iteration failed")
        iterations += 1
        if stop.wait(interval_seconds):
            break

    log.info(f"Marketplace synchronization loop stopped after {iterations} iterations")
    return iterations
