"""
Identity routes: PUT /user/{email} (upsert + token), GET /users (admin), GET /user/{email} (owner).
"""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from homescape_server.auth import RequireAdmin, RequireToken, forbidden
from homescape_server.config import ROLES
from homescape_server.database import get_db
from homescape_server.store import get_user, list_users, upsert_user
from homescape_server.tokens import issue_token

logger = logging.getLogger(__name__)
router = APIRouter()


@router.put("/user/{email}")
def put_user(
    email: str,
    profile: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
):
    """
    Create or overwrite the identity for `email` and return the write result with a fresh token.
    Token claims are the supplied profile fields plus the stored email and role.
    """
    if "email" in profile and profile["email"] != email:
        raise HTTPException(status_code=422, detail="Body email does not match path email")
    if "role" in profile and profile["role"] not in ROLES:
        raise HTTPException(status_code=422, detail=f"role must be one of: {', '.join(ROLES)}")

    result, user = upsert_user(db, email, profile)
    claims = {k: v for k, v in profile.items() if k != "_id"}
    claims["email"] = user.email
    claims["role"] = user.role
    token = issue_token(claims)
    return {"result": result, "token": token}


@router.get("/users")
def get_users(db: Annotated[Session, Depends(get_db)], claims: dict = RequireAdmin):
    return [u.to_dict() for u in list_users(db)]


@router.get("/user/{email}")
def get_single_user(email: str, db: Annotated[Session, Depends(get_db)], claims: dict = RequireToken):
    if email != claims.get("email"):
        raise forbidden()
    user = get_user(db, email)
    return user.to_dict() if user else None
