"""Users connected to a chat topic."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from chatgateway.tokens import JwtToken


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ActiveUser:
    """A user holding an open connection to ``topic``."""

    jwt_token: JwtToken
    topic: str
    logged_in: datetime = field(default_factory=_now)
    logged_out: datetime | None = None
    last_activity: datetime | None = None
    message_count: int = 0