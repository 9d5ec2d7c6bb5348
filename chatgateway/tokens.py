"""Access tokens carried by chat clients."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import jwt


class InvalidTokenError(ValueError):
    """Raised when a token cannot be decoded or lacks a required claim."""


def _timestamp(claims: Mapping[str, Any], name: str) -> datetime:
    value = claims[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTokenError(f"claim {name!r} must be an integer")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTokenError(f"claim {name!r} is out of range") from exc


@dataclass(frozen=True)
class JwtToken:
    """The claims of an access token that the gateway relies on."""

    username: str
    created_at: datetime
    expires_at: datetime
    authorities: tuple[str, ...] = ()

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> JwtToken:
        """Build a token from decoded claims: ``sub``, ``iat``, ``exp`` and ``authorities``."""
        try:
            username = claims["sub"]
            created_at = _timestamp(claims, "iat")
            expires_at = _timestamp(claims, "exp")
            authorities = claims["authorities"]
        except KeyError as exc:
            raise InvalidTokenError(f"missing claim {exc.args[0]!r}") from None
        if not isinstance(username, str):
            raise InvalidTokenError("claim 'sub' must be a string")
        if not isinstance(authorities, list):
            raise InvalidTokenError("claim 'authorities' must be an array")
        # The authorities claim is required but its entries are not collected.
        return cls(username=username, created_at=created_at, expires_at=expires_at)


def decode_token(token: str) -> JwtToken:
    """Decode a token without verifying its signature."""
    if not isinstance(token, str):
        raise InvalidTokenError("token must be a string")
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    return JwtToken.from_claims(claims)