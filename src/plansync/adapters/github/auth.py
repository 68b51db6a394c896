"""GitHub App authentication."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Final

import jwt

from plansync.config import ConfigurationError

# GitHub rejects App tokens that live longer than ten minutes.
JWT_MAX_LIFETIME: Final[timedelta] = timedelta(minutes=10)
# Allow for clock drift between us and GitHub.
JWT_BACKDATE: Final[timedelta] = timedelta(seconds=60)
JWT_ALGORITHM: Final[str] = "RS256"


def github_app_jwt(app_id: int, app_key: str, *, now: datetime | None = None) -> str:
    """Return a signed JWT authenticating as the GitHub App ``app_id``."""

    issued = (now or datetime.now(UTC)).astimezone(UTC)
    claims = {
        "iat": int((issued - JWT_BACKDATE).timestamp()),
        "exp": int((issued + JWT_MAX_LIFETIME).timestamp()),
        "iss": str(app_id),
    }
    try:
        return jwt.encode(claims, app_key, algorithm=JWT_ALGORITHM)
    except jwt.PyJWTError as exc:
        raise ConfigurationError("GITHUB_APP_KEY is not a usable RSA private key") from exc
