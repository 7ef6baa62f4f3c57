"""
Seed an admin identity from environment. No hardcoded credentials.
Optional: set HOMESCAPE_SEED_ADMIN_EMAIL.
"""
import logging

from sqlalchemy.orm import Session

from homescape_server.config import ADMIN_ROLE, SEED_ADMIN_EMAIL
from homescape_server.store import get_user, upsert_user

logger = logging.getLogger(__name__)


def seed_from_env(db: Session, admin_email: str | None = SEED_ADMIN_EMAIL) -> None:
    """Ensure the configured admin identity exists and carries the admin role."""
    if not admin_email:
        return
    user = get_user(db, admin_email)
    if user is not None and user.role == ADMIN_ROLE:
        logger.debug("Admin already exists: %s", admin_email)
        return
    upsert_user(db, admin_email, {"role": ADMIN_ROLE})
    logger.info("Seeded admin: %s", admin_email)
