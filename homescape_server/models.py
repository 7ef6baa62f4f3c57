"""
SQLAlchemy models for HomeScape: users (identities), homes (listings), bookings.
Each row keeps the full client document in a JSON column; queried fields are copied
into indexed columns on every write.
"""
import secrets
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from homescape_server.config import DEFAULT_ROLE


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    """Opaque 24-char hex identifier."""
    return secrets.token_hex(12)


class Base(DeclarativeBase):
    pass


class DocumentMixin:
    """Row holding a JSON document; `_id` is added on output, never stored in the document."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_object_id)
    document: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, onupdate=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.id, **(self.document or {})}


class User(DocumentMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_ROLE)


class Home(DocumentMixin, Base):
    __tablename__ = "homes"

    host_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    def sync_indexed_fields(self) -> None:
        doc = self.document or {}
        host = doc.get("host")
        email = host.get("email") if isinstance(host, dict) else None
        self.host_email = email if isinstance(email, str) else None
        location = doc.get("location")
        self.location = location if isinstance(location, str) else None


class Booking(DocumentMixin, Base):
    __tablename__ = "bookings"

    guest_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)

    def sync_indexed_fields(self) -> None:
        guest_email = (self.document or {}).get("guestEmail")
        self.guest_email = guest_email if isinstance(guest_email, str) else None
