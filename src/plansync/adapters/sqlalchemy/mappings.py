"""SQLAlchemy mapping metadata for the marketplace domain model."""

from __future__ import annotations

import logging
import uuid
from functools import cache

from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint, Uuid, orm
from sqlalchemy.orm import configure_mappers

from plansync.domain.model import MarketplaceAccount, MarketplacePlan

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

marketplace_plan_table = Table(
    "marketplace_plan",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("github_id", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("description", String, nullable=False),
    UniqueConstraint("github_id"),
)

marketplace_account_table = Table(
    "marketplace_account",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("github_id", Integer, nullable=False),
    Column("github_login", String, nullable=False, index=True),
    Column(
        "marketplace_plan_id",
        UUIDColumnType,
        ForeignKey("marketplace_plan.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    UniqueConstraint("github_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(MarketplacePlan, marketplace_plan_table)
    mapper_registry.map_imperatively(MarketplaceAccount, marketplace_account_table)

    configure_mappers()
    return mapper_registry

