"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from plansync.adapters.github import GitHubMarketplaceClient
from plansync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from plansync.config import get_sync_config
from plansync.domain.marketplace import (
    check_marketplace_plan,
    fetch_discount_marketplace_plan,
    run_synchronize,
    synchronize_account,
    synchronize_marketplace_plans,
)
from plansync.domain.ports import RemoteAccount

if TYPE_CHECKING:
    import threading
    from uuid import UUID

    from plansync.domain.marketplace import MarketplacePlanDecision, SyncMarketplaceResult
    from plansync.domain.marketplace.sync import UnitOfWorkFactory
    from plansync.domain.model import Repo
    from plansync.domain.ports import MarketplaceListing

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def sync_marketplace_once(
    *,
    listing: MarketplaceListing | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncMarketplaceResult:
    """Run a single Marketplace synchronization using the configured adapters."""

    _ensure_started()
    result = run_synchronize(
        listing=listing or GitHubMarketplaceClient(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
    )
    log.info(
        f"Finished Marketplace sync: plans={result.plans}, accounts={result.accounts}, "
        f"deleted={result.deleted}"
    )
    return result


def run_marketplace_sync_loop(
    *,
    listing: MarketplaceListing | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    interval_seconds: float | None = None,
    stop_event: threading.Event | None = None,
) -> int:
    """Synchronize the Marketplace until ``stop_event`` is set."""

    _ensure_started()
    effective_interval = (
        interval_seconds if interval_seconds is not None else get_sync_config().interval_seconds
    )
    return synchronize_marketplace_plans(
        listing=listing or GitHubMarketplaceClient(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
        interval_seconds=effective_interval,
        stop_event=stop_event,
    )


def check_repo_plan(
    repo: Repo,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MarketplacePlanDecision:
    """Decide whether ``repo``'s owner plan allows using it."""

    _ensure_started()
    return check_marketplace_plan(
        repo,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
    )


def grant_discount_plan(
    *,
    github_id: int,
    login: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> UUID:
    """Put an account on the manually managed discount plan.

    The account survives later synchronizations for as long as it stays on that plan.
    """

    _ensure_started()
    factory = unit_of_work_factory or SqlAlchemyUnitOfWork
    with factory() as uow:
        plan = fetch_discount_marketplace_plan(uow.repositories.plans)
        account_id = synchronize_account(
            uow.repositories.accounts,
            plan.id,
            RemoteAccount(github_id=github_id, login=login),
        )
        uow.commit()

    log.info(f"Granted {plan.name!r} plan to {login} (github_id={github_id})")
    return account_id
