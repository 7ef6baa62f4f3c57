"""
Booking routes. All need a token. Creating a booking schedules the guest's confirmation email.
"""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from sqlalchemy.orm import Session

from homescape_server.auth import RequireToken
from homescape_server.database import get_db
from homescape_server.notifications import Mailer, get_mailer, send_booking_confirmation
from homescape_server.store import delete_booking, find_bookings, insert_booking

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/bookings")
def list_bookings(
    db: Annotated[Session, Depends(get_db)],
    email: str | None = None,
    claims: dict = RequireToken,
):
    """Bookings for guest `email`; all bookings when no email is given."""
    return [b.to_dict() for b in find_bookings(db, guest_email=email)]


@router.post("/bookings")
def create_booking(
    booking: Annotated[dict[str, Any], Body()],
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
    claims: dict = RequireToken,
):
    result, stored = insert_booking(db, booking)
    background_tasks.add_task(send_booking_confirmation, mailer, result["insertedId"], stored.to_dict())
    return result


@router.delete("/bookings/{booking_id}")
def remove_booking(booking_id: str, db: Annotated[Session, Depends(get_db)], claims: dict = RequireToken):
    return delete_booking(db, booking_id)
