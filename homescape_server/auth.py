"""
Request guards for HomeScape routes.
RequireToken proves who the caller is; RequireAdmin additionally checks the stored role.
Resource ownership (path email == token email) is checked by the handlers themselves.
"""
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from homescape_server.config import ADMIN_ROLE
from homescape_server.database import get_db
from homescape_server.store import get_user
from homescape_server.tokens import AuthError, verify_token

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "unauthorized access"
FORBIDDEN_MESSAGE = "Forbidden access"


def forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)


security = HTTPBearer(auto_error=False)


def get_bearer_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """
    Extract the token from 'Authorization: Bearer <token>'.
    Missing header -> 401; present but not a Bearer credential -> 403.
    """
    if not request.headers.get("Authorization"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if credentials is None:
        raise forbidden()
    return credentials.credentials


def get_claims(
    request: Request,
    token: Annotated[str, Depends(get_bearer_token)],
) -> dict:
    """Dependency: valid Bearer token -> decoded claims, also attached to request.state.claims."""
    try:
        claims = verify_token(token)
    except AuthError as e:
        logger.debug("Rejected token: %s", e)
        raise forbidden()
    request.state.claims = claims
    return claims


def require_admin(
    claims: Annotated[dict, Depends(get_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Dependency: caller's stored identity must carry the admin role."""
    email = claims.get("email")
    user = get_user(db, email) if isinstance(email, str) else None
    if user is None or user.role != ADMIN_ROLE:
        raise forbidden()
    return claims


RequireToken = Depends(get_claims)
RequireAdmin = Depends(require_admin)
