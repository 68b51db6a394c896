from __future__ import annotations

import argparse
import logging
import math
import sys
import threading
from signal import SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from plansync.app import (
    check_repo_plan,
    grant_discount_plan,
    run_marketplace_sync_loop,
    sync_marketplace_once,
)
from plansync.config import ConfigurationError, configure_logging
from plansync.domain.marketplace import when_marketplace_plan_forbids
from plansync.domain.model import Repo

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from plansync.domain.marketplace import MarketplacePlanLimitation

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mirror the GitHub Marketplace listing")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Synchronize Marketplace plans and accounts")
    sync.add_argument(
        "--once",
        action="store_true",
        help="Run a single iteration instead of looping forever",
    )
    sync.add_argument(
        "--interval-seconds",
        type=float,
        default=None,
        help="Delay between iterations (defaults to config)",
    )

    check = subparsers.add_parser("check", help="Check what an owner's plan allows")
    check.add_argument("--owner", type=str, required=True, help="Repository owner login")
    check.add_argument("--repo", type=str, default="", help="Repository name (for logging)")
    check.add_argument(
        "--private",
        action="store_true",
        help="Treat the repository as private",
    )

    grant = subparsers.add_parser("grant", help="Grant the manually managed discount plan")
    grant.add_argument("--github-id", type=int, required=True, help="GitHub account id")
    grant.add_argument("--login", type=str, required=True, help="GitHub account login")

    return parser.parse_args(list(argv))


def _install_stop_handlers(stop_event: threading.Event) -> None:
    def handler(signal_received: int, _frame: FrameType | None) -> None:
        log.info(f"Received signal {signal_received}, stopping after the current iteration")
        stop_event.set()

    signal(SIGINT, handler)
    signal(SIGTERM, handler)


def _forbidden_exit(repo: Repo) -> Callable[[MarketplacePlanLimitation], None]:
    def exit_forbidden(limitation: MarketplacePlanLimitation) -> None:
        log.info(f"{repo.full_name}: forbidden ({limitation})")
        sys.exit(3)

    return exit_forbidden


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    try:
        configure_logging()
    except ConfigurationError:
        configure_logging(level=logging.INFO)
        log.exception("Invalid logging configuration")
        sys.exit(2)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    if parsed_args.command == "sync" and parsed_args.interval_seconds is not None:
        interval = parsed_args.interval_seconds
        if not math.isfinite(interval) or interval < 0:
            log.error("--interval-seconds must be a finite, non-negative number")
            sys.exit(2)

    try:
        if parsed_args.command == "sync" and parsed_args.once:
            sync_marketplace_once()
        elif parsed_args.command == "sync":
            stop_event = threading.Event()
            _install_stop_handlers(stop_event)
            run_marketplace_sync_loop(
                interval_seconds=parsed_args.interval_seconds,
                stop_event=stop_event,
            )
        elif parsed_args.command == "check":
            repo = Repo(
                owner=parsed_args.owner,
                name=parsed_args.repo,
                is_private=parsed_args.private,
            )
            when_marketplace_plan_forbids(check_repo_plan(repo), _forbidden_exit(repo))
            log.info(f"{repo.full_name}: allowed")
        elif parsed_args.command == "grant":
            account_id = grant_discount_plan(
                github_id=parsed_args.github_id,
                login=parsed_args.login,
            )
            log.info(f"Account stored as {account_id}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
