"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite

from plansync.adapters.sqlalchemy.mappings import (
    marketplace_account_table,
    marketplace_plan_table,
)
from plansync.domain.model import MarketplaceAccount, MarketplacePlan

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable, Collection, Sequence

    from sqlalchemy import CursorResult, Table
    from sqlalchemy.orm import Session

# Dialects with INSERT ... ON CONFLICT DO UPDATE ... RETURNING.
_UPSERT_INSERTS: dict[str, Callable[[Table], Any]] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class UnsupportedDialectError(RuntimeError):
    """Raised when the configured database cannot express an upsert."""


class _UpsertMixin:
    session: Session

    def _upsert(
        self,
        table: Table,
        values: dict[str, object],
        *,
        update_columns: tuple[str, ...],
    ) -> uuid.UUID:
        """Insert ``values`` or update ``update_columns`` of the row with the same github_id."""

        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise UnsupportedDialectError(f"Upserts are not supported on {dialect!r}")

        stmt = insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.github_id],
            set_={column: stmt.excluded[column] for column in update_columns},
        ).returning(table.c.id)
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyMarketplacePlanRepository(_UpsertMixin):
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(self, plan: MarketplacePlan) -> uuid.UUID:
        return self._upsert(
            marketplace_plan_table,
            {
                "id": plan.id,
                "github_id": plan.github_id,
                "name": plan.name,
                "description": plan.description,
            },
            update_columns=("name", "description"),
        )

    def get(self, plan_id: uuid.UUID) -> MarketplacePlan | None:
        return self.session.get(MarketplacePlan, plan_id, populate_existing=True)

    def get_by_github_id(self, github_id: int) -> MarketplacePlan | None:
        stmt = (
            select(MarketplacePlan)
            .where(marketplace_plan_table.c.github_id == github_id)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_account_login(self, login: str) -> MarketplacePlan | None:
        stmt = (
            select(MarketplacePlan)
            .join(
                marketplace_account_table,
                marketplace_account_table.c.marketplace_plan_id == marketplace_plan_table.c.id,
            )
            .where(marketplace_account_table.c.github_login == login)
            .order_by(marketplace_account_table.c.github_id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyMarketplaceAccountRepository(_UpsertMixin):
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(self, account: MarketplaceAccount) -> uuid.UUID:
        return self._upsert(
            marketplace_account_table,
            {
                "id": account.id,
                "github_id": account.github_id,
                "github_login": account.github_login,
                "marketplace_plan_id": account.marketplace_plan_id,
            },
            update_columns=("github_login", "marketplace_plan_id"),
        )

    def get_by_github_id(self, github_id: int) -> MarketplaceAccount | None:
        stmt = (
            select(MarketplaceAccount)
            .where(marketplace_account_table.c.github_id == github_id)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_unsynchronized(
        self,
        synchronized_ids: Collection[uuid.UUID],
        *,
        excluded_plan_id: uuid.UUID,
    ) -> Sequence[MarketplaceAccount]:
        stmt = (
            select(MarketplaceAccount)
            .where(marketplace_account_table.c.id.not_in(list(synchronized_ids)))
            .where(marketplace_account_table.c.marketplace_plan_id != excluded_plan_id)
        )
        return self.session.execute(stmt).scalars().all()

    def delete(self, account_ids: Collection[uuid.UUID]) -> int:
        if not account_ids:
            return 0
        stmt = delete(marketplace_account_table).where(
            marketplace_account_table.c.id.in_(list(account_ids))
        )
        result = cast("CursorResult[Any]", self.session.execute(stmt))
        return result.rowcount


if TYPE_CHECKING:
    from plansync.domain.ports.persistence import (
        MarketplaceAccountRepository,
        MarketplacePlanRepository,
    )

    _session_stub = cast("Session", object())
    _plan_repo: MarketplacePlanRepository = SqlAlchemyMarketplacePlanRepository(_session_stub)
    _account_repo: MarketplaceAccountRepository = SqlAlchemyMarketplaceAccountRepository(
        _session_stub
    )
