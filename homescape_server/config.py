"""
HomeScape server configuration. All values come from the environment; no secrets in this file.
"""
import os

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5000"))

# Store connection URL (SQLAlchemy). SQLite is fine for development.
DATABASE_URL = os.environ.get("DB_URI", "sqlite:///./homescape.db")

# HS256 secret for identity tokens. Empty means: generate one per process (see tokens.py).
ACCESS_TOKEN_SECRET = os.environ.get("ACCESS_TOKEN_SECRET", "")

# Identity token lifetime (seconds). Default 5 hours.
ACCESS_TOKEN_TTL_SECONDS = int(os.environ.get("ACCESS_TOKEN_TTL_SECONDS", str(5 * 60 * 60)))

# Roles an identity record may carry; the first is the default for new records
ROLES = ("guest", "admin")
DEFAULT_ROLE = ROLES[0]
ADMIN_ROLE = "admin"

# SMTP for booking notifications. No credentials = notifications disabled.
MAIL_USER = os.environ.get("MAIL_USER", "")
MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
MAIL_SMTP_HOST = os.environ.get("MAIL_SMTP_HOST", "smtp.gmail.com")
MAIL_SMTP_PORT = int(os.environ.get("MAIL_SMTP_PORT", "587"))

# Payment provider. No key = payment route answers 503.
STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY", "")
PAYMENT_CURRENCY = os.environ.get("PAYMENT_CURRENCY", "usd")

# Allowed origins for cross-origin requests (comma-separated)
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,https://homescape-ae176.web.app"
    ).split(",")
    if o.strip()
]

# Optional admin identity ensured at startup
SEED_ADMIN_EMAIL = os.environ.get("HOMESCAPE_SEED_ADMIN_EMAIL", "").strip() or None

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
