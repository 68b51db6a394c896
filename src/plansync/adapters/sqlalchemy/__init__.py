"""SQLAlchemy adapter package for plansync."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyMarketplaceAccountRepository,
    SqlAlchemyMarketplacePlanRepository,
    UnsupportedDialectError,
)
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    create_database_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyMarketplaceAccountRepository",
    "SqlAlchemyMarketplacePlanRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "UnsupportedDialectError",
    "create_database_engine",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
