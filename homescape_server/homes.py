"""
Listing routes. Browsing is public; writes need a token. Host listings need the host's own token.
"""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from homescape_server.auth import RequireToken, forbidden
from homescape_server.database import get_db
from homescape_server.store import delete_home, find_homes, get_home, insert_home, upsert_home

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search-homes")
def search_homes(db: Annotated[Session, Depends(get_db)], location: str | None = None):
    """Listings at exactly `location`; all listings when no location is given."""
    return [h.to_dict() for h in find_homes(db, location=location)]


@router.get("/homes")
def all_homes(db: Annotated[Session, Depends(get_db)]):
    return [h.to_dict() for h in find_homes(db)]


@router.get("/homes/{email}")
def host_homes(email: str, db: Annotated[Session, Depends(get_db)], claims: dict = RequireToken):
    if email != claims.get("email"):
        raise forbidden()
    return [h.to_dict() for h in find_homes(db, host_email=email)]


@router.get("/home/{home_id}")
def single_home(home_id: str, db: Annotated[Session, Depends(get_db)]):
    home = get_home(db, home_id)
    return home.to_dict() if home else None


@router.post("/homes")
def add_home(
    home: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
    claims: dict = RequireToken,
):
    return insert_home(db, home)


@router.put("/home/{home_id}")
def update_home(
    home_id: str,
    home: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
    claims: dict = RequireToken,
):
    return upsert_home(db, home_id, home)


@router.delete("/home/{home_id}")
def remove_home(home_id: str, db: Annotated[Session, Depends(get_db)], claims: dict = RequireToken):
    return delete_home(db, home_id)
