"""Translate Marketplace payloads into listing port records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plansync.domain.ports import RemoteAccount, RemotePlan

from .schema import AccountPayload, PlanPayload

if TYPE_CHECKING:
    from .schema import AccountPayloadInput, PlanPayloadInput


def parse_plan(payload: PlanPayloadInput) -> RemotePlan:
    plan = payload if isinstance(payload, PlanPayload) else PlanPayload.model_validate(payload)
    return RemotePlan(
        github_id=plan.id,
        name=plan.name,
        description=plan.description or "",
    )


def parse_account(payload: AccountPayloadInput) -> RemoteAccount:
    account = (
        payload if isinstance(payload, AccountPayload) else AccountPayload.model_validate(payload)
    )
    return RemoteAccount(github_id=account.id, login=account.login)
