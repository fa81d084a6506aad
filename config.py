"""Flask configuration for the movie catalog API."""

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _flag(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


PRODUCTION = "production" in (
    os.environ.get("FLASK_ENV", "").lower(),
    os.environ.get("NODE_ENV", "").lower(),
)
"""Production mode. Cookies are only marked ``secure`` when this is set."""

JWT_SECRET_KEY = os.environ.get("JWT_SECRET", "super-secret-key")
"""Signing key for access tokens."""

JWT_REFRESH_SECRET_KEY = os.environ.get("REFRESH_SECRET", "refresh-secret")
"""Signing key for refresh tokens. Must differ from ``JWT_SECRET_KEY``."""

ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
REFRESH_TOKEN_EXPIRES = timedelta(days=7)

MONGO_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.environ.get("MONGODB_DB", "sample_mflix")
MONGO_TIMEOUT_MS = int(os.environ.get("MONGODB_TIMEOUT_MS", "5000"))
MONGO_PING_ON_CONNECT = _flag(os.environ.get("MONGODB_PING", "1"))

EXPOSE_ERROR_DETAILS = _flag(
    os.environ.get("EXPOSE_ERROR_DETAILS", "0" if PRODUCTION else "1")
)
"""Include raw driver error text in 500 responses."""

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Cookie transport (flask-jwt-extended)
JWT_TOKEN_LOCATION = ["cookies"]
JWT_ACCESS_COOKIE_NAME = "token"
JWT_REFRESH_COOKIE_NAME = "refreshToken"
JWT_ACCESS_COOKIE_PATH = "/"
JWT_REFRESH_COOKIE_PATH = "/"
JWT_COOKIE_SECURE = PRODUCTION
JWT_COOKIE_CSRF_PROTECT = False
JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRES
JWT_REFRESH_TOKEN_EXPIRES = REFRESH_TOKEN_EXPIRES

INSECURE_DEFAULTS = {
    "JWT_SECRET_KEY": ("JWT_SECRET", "super-secret-key"),
    "JWT_REFRESH_SECRET_KEY": ("REFRESH_SECRET", "refresh-secret"),
    "MONGO_URI": ("MONGODB_URI", "mongodb://localhost:27017"),
}
"""Settings whose fallback value is only fit for local development."""
