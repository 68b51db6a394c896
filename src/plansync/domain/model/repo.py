"""Repository records consulted by entitlement checks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Repo:
    owner: str
    name: str
    is_private: bool

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
