"""
Tests for app wiring: liveness, CORS, store failure handling, startup seeding.
"""
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from homescape_server.database import SessionLocal, get_db
from homescape_server.main import app
from homescape_server.seed import seed_from_env
from homescape_server.store import get_user


def test_root_returns_liveness_text(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Server is running..."


def test_health_returns_200(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json().get("service") == "homescape_server"


# --- CORS ---


def test_cors_preflight_from_allowed_origin(client):
    response = client.options(
        "/homes",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight_from_unknown_origin_is_refused(client):
    response = client.options(
        "/homes",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


# --- store failures ---


def test_store_unavailable_returns_503(client):
    def unreachable_db():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = unreachable_db
    response = client.get("/homes")
    assert response.status_code == 503
    assert response.json() == {"detail": "Store unavailable"}


def test_other_store_error_returns_500(client):
    def failing_db():
        raise SQLAlchemyError("boom")

    app.dependency_overrides[get_db] = failing_db
    response = client.get("/homes")
    assert response.status_code == 500
    assert response.json() == {"detail": "Store error"}


def test_startup_store_failure_still_serves_root():
    error = OperationalError("CREATE TABLE", {}, Exception("connection refused"))
    with patch("homescape_server.main.init_db", side_effect=error):
        with TestClient(app) as c:
            response = c.get("/")
    assert response.status_code == 200


# --- seeding ---


def test_seed_creates_admin():
    db = SessionLocal()
    try:
        seed_from_env(db, admin_email="root@x.com")
        assert get_user(db, "root@x.com").role == "admin"
    finally:
        db.close()


def test_seed_promotes_existing_identity(make_user):
    make_user("root@x.com", name="Root")
    db = SessionLocal()
    try:
        seed_from_env(db, admin_email="root@x.com")
        user = get_user(db, "root@x.com")
        assert user.role == "admin"
        assert user.document["name"] == "Root"
    finally:
        db.close()


def test_seed_without_email_does_nothing():
    db = SessionLocal()
    try:
        seed_from_env(db, admin_email=None)
        assert get_user(db, "root@x.com") is None
    finally:
        db.close()


def test_startup_runs_seed():
    with patch("homescape_server.main.seed_from_env", wraps=seed_from_env) as seed:
        with TestClient(app):
            pass
    seed.assert_called_once()
