"""Pydantic models describing the GitHub Marketplace listing payloads."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PlanPayload(GitHubBaseModel):
    id: int = Field(ge=0)
    name: str
    description: str | None = None
    number: int | None = None
    state: str | None = None
    price_model: str | None = None
    monthly_price_in_cents: int | None = None
    yearly_price_in_cents: int | None = None
    has_free_trial: bool | None = None


class MarketplacePurchasePayload(GitHubBaseModel):
    billing_cycle: str | None = None
    on_free_trial: bool | None = None
    unit_count: int | None = None


class AccountPayload(GitHubBaseModel):
    id: int = Field(ge=0)
    login: str
    type: str | None = None
    marketplace_purchase: MarketplacePurchasePayload | None = None


PlanListAdapter: TypeAdapter[list[PlanPayload]] = TypeAdapter(list[PlanPayload])
AccountListAdapter: TypeAdapter[list[AccountPayload]] = TypeAdapter(list[AccountPayload])

PlanPayloadInput = PlanPayload | Mapping[str, object]
AccountPayloadInput = AccountPayload | Mapping[str, object]
