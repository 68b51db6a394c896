from __future__ import annotations

from typing import TYPE_CHECKING

from plansync.domain.marketplace import (
    delete_unsynchronized,
    fetch_discount_marketplace_plan,
    synchronize_account,
    synchronize_plan,
)
from plansync.domain.ports import MarketplaceRepositories
from tests.helpers.marketplace import (
    FakeAccountRepository,
    FakeMarketplaceStore,
    FakePlanRepository,
    make_remote_account,
    make_remote_plan,
)

if TYPE_CHECKING:
    from uuid import UUID


def _repositories(store: FakeMarketplaceStore) -> MarketplaceRepositories:
    return MarketplaceRepositories(
        plans=FakePlanRepository(store),
        accounts=FakeAccountRepository(store),
    )


def _seed(repositories: MarketplaceRepositories) -> dict[str, UUID]:
    plan_id = synchronize_plan(repositories.plans, make_remote_plan(2553, "Pro"))
    discount = fetch_discount_marketplace_plan(repositories.plans)
    return {
        "a1": synchronize_account(repositories.accounts, plan_id, make_remote_account(1, "a1")),
        "a2": synchronize_account(repositories.accounts, plan_id, make_remote_account(2, "a2")),
        "a3": synchronize_account(
            repositories.accounts, discount.id, make_remote_account(3, "a3")
        ),
    }


def test_delete_unsynchronized_keeps_synchronized_and_discount_accounts() -> None:
    store = FakeMarketplaceStore()
    repositories = _repositories(store)
    ids = _seed(repositories)

    deleted = delete_unsynchronized(repositories, {ids["a1"]})

    assert deleted == 1
    assert set(store.accounts) == {ids["a1"], ids["a3"]}


def test_delete_unsynchronized_is_idempotent() -> None:
    store = FakeMarketplaceStore()
    repositories = _repositories(store)
    ids = _seed(repositories)

    delete_unsynchronized(repositories, {ids["a1"]})
    deleted_again = delete_unsynchronized(repositories, {ids["a1"]})

    assert deleted_again == 0
    assert set(store.accounts) == {ids["a1"], ids["a3"]}


def test_delete_unsynchronized_with_empty_set_spares_only_discount_accounts() -> None:
    store = FakeMarketplaceStore()
    repositories = _repositories(store)
    ids = _seed(repositories)

    deleted = delete_unsynchronized(repositories, set())

    assert deleted == 2
    assert set(store.accounts) == {ids["a3"]}


def test_delete_unsynchronized_creates_discount_plan_when_missing() -> None:
    store = FakeMarketplaceStore()
    repositories = _repositories(store)

    deleted = delete_unsynchronized(repositories, set())

    assert deleted == 0
    discount = repositories.plans.get_by_github_id(0)
    assert discount is not None
    assert discount.is_discount_plan
