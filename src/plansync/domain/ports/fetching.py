"""Ports for fetching the remote Marketplace catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class RemotePlan:
    """A plan as reported by the Marketplace listing."""

    github_id: int
    name: str
    description: str


@dataclass(frozen=True, slots=True)
class RemoteAccount:
    """An account as reported under one Marketplace plan."""

    github_id: int
    login: str


@runtime_checkable
class MarketplaceListing(Protocol):
    """Read-only access to the remote plan catalog and its subscribers."""

    def list_plans(self) -> Sequence[RemotePlan]: ...

    def list_accounts_for_plan(self, github_id: int) -> Sequence[RemoteAccount]: ...


__all__ = ["MarketplaceListing", "RemoteAccount", "RemotePlan"]
