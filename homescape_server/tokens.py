"""
Identity tokens: HS256 JWTs carrying the caller's email and role plus profile claims.
Pure computation; no store access.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from homescape_server.config import ACCESS_TOKEN_SECRET, ACCESS_TOKEN_TTL_SECONDS

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Registered claims set by issue_token; stripped again by verify_token
_TIMING_CLAIMS = ("iat", "exp")


class AuthError(Exception):
    """Token rejected. Subclasses say why."""


class InvalidToken(AuthError):
    pass


class ExpiredToken(AuthError):
    pass


_generated_secret: str | None = None


def get_token_secret() -> str:
    """Configured signing secret, or a per-process random one (tokens then die with the process)."""
    global _generated_secret
    if ACCESS_TOKEN_SECRET:
        return ACCESS_TOKEN_SECRET
    if _generated_secret is None:
        _generated_secret = secrets.token_urlsafe(48)
        logger.warning("ACCESS_TOKEN_SECRET not set; using a generated secret for this process")
    return _generated_secret


def issue_token(
    claims: dict[str, Any],
    secret: str | None = None,
    ttl: int | float | timedelta | None = None,
) -> str:
    """Sign `claims` with an expiry of now + ttl (seconds or timedelta; default from config)."""
    if ttl is None:
        ttl = ACCESS_TOKEN_TTL_SECONDS
    if not isinstance(ttl, timedelta):
        ttl = timedelta(seconds=ttl)
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + ttl).timestamp())
    return jwt.encode(payload, secret or get_token_secret(), algorithm=ALGORITHM)


def verify_token(token: str, secret: str | None = None) -> dict[str, Any]:
    """
    Verify signature and expiry; return the claims as issued (without iat/exp).
    Raises ExpiredToken or InvalidToken.
    """
    try:
        payload = jwt.decode(
            token,
            secret or get_token_secret(),
            algorithms=[ALGORITHM],
            options={"require": ["exp"], "verify_aud": False},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredToken("Token expired") from e
    except jwt.InvalidTokenError as e:
        logger.debug("Token verification failed: %s", e)
        raise InvalidToken("Token verification failed") from e
    for name in _TIMING_CLAIMS:
        payload.pop(name, None)
    return payload
