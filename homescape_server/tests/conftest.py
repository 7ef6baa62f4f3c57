"""
Pytest configuration for homescape_server. In-memory SQLite and a fixed token secret;
mail and payment credentials removed so nothing leaves the process.
"""
import os

os.environ["DB_URI"] = "sqlite:///:memory:"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret-0123456789-abcdefghijklmnop"
for _name in (
    "HOMESCAPE_SEED_ADMIN_EMAIL",
    "MAIL_USER",
    "MAIL_PASSWORD",
    "STRIPE_SECRET_KEY",
    "CORS_ORIGINS",
    "ACCESS_TOKEN_TTL_SECONDS",
):
    os.environ.pop(_name, None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from homescape_server.database import SessionLocal, engine, init_db  # noqa: E402
from homescape_server.main import app  # noqa: E402
from homescape_server.models import Base  # noqa: E402
from homescape_server.store import upsert_user  # noqa: E402
from homescape_server.tokens import issue_token  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    """Empty tables for every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user():
    """Store an identity directly (bypassing the API) and return its document."""

    def _make(email: str, **fields):
        db = SessionLocal()
        try:
            _, user = upsert_user(db, email, fields)
            return user.to_dict()
        finally:
            db.close()

    return _make


@pytest.fixture
def auth_headers():
    """Bearer header for a token carrying `email` (and any extra claims)."""

    def _headers(email: str, **claims):
        token = issue_token({"email": email, **claims})
        return {"Authorization": f"Bearer {token}"}

    return _headers
