"""
Identity, listing and booking stores. One store call per request; writes commit immediately.
Write results use the same shape as a document database driver (insertedId, matchedCount, ...).
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from homescape_server.config import DEFAULT_ROLE
from homescape_server.models import Booking, Home, User, new_object_id

logger = logging.getLogger(__name__)


def _clean(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop the identifier from client-supplied fields; `_id` is system-assigned and immutable."""
    return {k: v for k, v in fields.items() if k != "_id"}


def _update_result(matched: int, modified: int, upserted_id: str | None) -> dict[str, Any]:
    return {
        "acknowledged": True,
        "matchedCount": matched,
        "modifiedCount": modified,
        "upsertedId": upserted_id,
        "upsertedCount": 1 if upserted_id else 0,
    }


def _insert_result(inserted_id: str) -> dict[str, Any]:
    return {"acknowledged": True, "insertedId": inserted_id}


def _delete_result(deleted: int) -> dict[str, Any]:
    return {"acknowledged": True, "deletedCount": deleted}


# --- identities ---


def get_user(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at).all()


def upsert_user(db: Session, email: str, fields: dict[str, Any]) -> tuple[dict[str, Any], User]:
    """
    Create the identity for `email` or overwrite the supplied top-level fields.
    Fields not supplied survive; `email` always equals the key; new records get the default role.
    """
    fields = _clean(fields)
    fields["email"] = email
    user = get_user(db, email)
    if user is None:
        document = dict(fields)
        document.setdefault("role", DEFAULT_ROLE)
        user = User(id=new_object_id(), email=email, role=document["role"], document=document)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created identity %s", email)
        return _update_result(0, 0, user.id), user

    document = {**(user.document or {}), **fields}
    modified = document != user.document
    if modified:
        user.document = document
        user.role = document.get("role", DEFAULT_ROLE)
        db.commit()
        db.refresh(user)
    return _update_result(1, int(modified), None), user


# --- listings ---


def find_homes(db: Session, location: str | None = None, host_email: str | None = None) -> list[Home]:
    """All listings, narrowed by exact location and/or host email when given."""
    q = db.query(Home)
    if location:
        q = q.filter(Home.location == location)
    if host_email is not None:
        q = q.filter(Home.host_email == host_email)
    return q.order_by(Home.created_at).all()


def get_home(db: Session, home_id: str) -> Home | None:
    return db.query(Home).filter(Home.id == home_id).first()


def insert_home(db: Session, fields: dict[str, Any]) -> dict[str, Any]:
    home = Home(id=new_object_id(), document=_clean(fields))
    home.sync_indexed_fields()
    db.add(home)
    db.commit()
    logger.info("Created listing %s", home.id)
    return _insert_result(home.id)


def upsert_home(db: Session, home_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """Overwrite supplied fields of listing `home_id`, creating it under that id when absent."""
    fields = _clean(fields)
    home = get_home(db, home_id)
    if home is None:
        home = Home(id=home_id, document=fields)
        home.sync_indexed_fields()
        db.add(home)
        db.commit()
        logger.info("Created listing %s by upsert", home_id)
        return _update_result(0, 0, home_id)

    document = {**(home.document or {}), **fields}
    modified = document != home.document
    if modified:
        home.document = document
        home.sync_indexed_fields()
        db.commit()
    return _update_result(1, int(modified), None)


def delete_home(db: Session, home_id: str) -> dict[str, Any]:
    deleted = db.query(Home).filter(Home.id == home_id).delete(synchronize_session=False)
    db.commit()
    return _delete_result(deleted)


# --- bookings ---


def find_bookings(db: Session, guest_email: str | None = None) -> list[Booking]:
    q = db.query(Booking)
    if guest_email:
        q = q.filter(Booking.guest_email == guest_email)
    return q.order_by(Booking.created_at).all()


def insert_booking(db: Session, fields: dict[str, Any]) -> tuple[dict[str, Any], Booking]:
    booking = Booking(id=new_object_id(), document=_clean(fields))
    booking.sync_indexed_fields()
    db.add(booking)
    db.commit()
    logger.info("Created booking %s", booking.id)
    return _insert_result(booking.id), booking


def delete_booking(db: Session, booking_id: str) -> dict[str, Any]:
    deleted = db.query(Booking).filter(Booking.id == booking_id).delete(synchronize_session=False)
    db.commit()
    return _delete_result(deleted)
