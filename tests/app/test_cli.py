from __future__ import annotations

import logging
import threading
import uuid

import pytest

from plansync.config import ConfigurationError
from plansync.domain.marketplace import (
    MarketplacePlanAllows,
    MarketplacePlanForbids,
    MarketplacePlanLimitation,
    SyncMarketplaceResult,
)
from plansync.domain.model import Repo
from plansync.ui import cli


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch: pytest.MonkeyPatch) -> list[threading.Event]:
    installed: list[threading.Event] = []
    monkeypatch.setattr(cli, "_install_stop_handlers", installed.append)
    return installed


def test_sync_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_once() -> SyncMarketplaceResult:
        calls.append("once")
        return SyncMarketplaceResult(plans=1, accounts=2, deleted=0)

    monkeypatch.setattr(cli, "sync_marketplace_once", fake_once)

    cli.main(["sync", "--once"])

    assert calls == ["once"]


def test_sync_loop_defaults(
    monkeypatch: pytest.MonkeyPatch,
    no_signal_handlers: list[threading.Event],
) -> None:
    captured: dict[str, object] = {}

    def fake_loop(**kwargs: object) -> int:
        captured.update(kwargs)
        return 0

    monkeypatch.setattr(cli, "run_marketplace_sync_loop", fake_loop)

    cli.main(["sync"])

    assert captured["interval_seconds"] is None
    assert isinstance(captured["stop_event"], threading.Event)
    assert no_signal_handlers == [captured["stop_event"]]


def test_sync_loop_with_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_loop(**kwargs: object) -> int:
        captured.update(kwargs)
        return 0

    monkeypatch.setattr(cli, "run_marketplace_sync_loop", fake_loop)

    cli.main(["sync", "--interval-seconds", "2.5"])

    assert captured["interval_seconds"] == 2.5


@pytest.mark.parametrize("raw", ["-1", "nan", "inf"])
def test_sync_rejects_unusable_interval(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    calls: list[object] = []
    monkeypatch.setattr(cli, "run_marketplace_sync_loop", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync", "--interval-seconds", raw])

    assert excinfo.value.code == 2
    assert calls == []


def test_check_allowed(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[Repo] = []

    def fake_check(repo: Repo) -> MarketplacePlanAllows:
        seen.append(repo)
        return MarketplacePlanAllows()

    monkeypatch.setattr(cli, "check_repo_plan", fake_check)

    cli.main(["check", "--owner", "octocat", "--repo", "secret", "--private"])

    assert seen == [Repo(owner="octocat", name="secret", is_private=True)]


def test_check_forbidden_exits_with_distinct_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "check_repo_plan",
        lambda _repo: MarketplacePlanForbids(MarketplacePlanLimitation.PLAN_PUBLIC_ONLY),
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["check", "--owner", "octocat", "--private"])

    assert excinfo.value.code == 3


def test_check_logs_limitation_when_plan_missing(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(
        cli,
        "check_repo_plan",
        lambda _repo: MarketplacePlanForbids(MarketplacePlanLimitation.PLAN_NOT_FOUND),
    )

    with caplog.at_level(logging.INFO, logger=cli.__name__), pytest.raises(SystemExit) as excinfo:
        cli.main(["check", "--owner", "stranger", "--repo", "secret", "--private"])

    assert excinfo.value.code == 3
    messages = [record.getMessage() for record in caplog.records if record.name == cli.__name__]
    assert messages == [f"stranger/secret: forbidden ({MarketplacePlanLimitation.PLAN_NOT_FOUND})"]


def test_grant(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_grant(**kwargs: object) -> uuid.UUID:
        captured.update(kwargs)
        return uuid.uuid4()

    monkeypatch.setattr(cli, "grant_discount_plan", fake_grant)

    cli.main(["grant", "--github-id", "77", "--login", "friend"])

    assert captured == {"github_id": 77, "login": "friend"}


def test_configuration_error_exits_with_code_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_once() -> SyncMarketplaceResult:
        raise ConfigurationError("GITHUB_APP_ID missing")

    monkeypatch.setattr(cli, "sync_marketplace_once", fake_once)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync", "--once"])

    assert excinfo.value.code == 2


def test_unexpected_error_exits_with_code_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_once() -> SyncMarketplaceResult:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(cli, "sync_marketplace_once", fake_once)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync", "--once"])

    assert excinfo.value.code == 1


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2
