"""
Moon Cargo — DEVELOPMENT settings.
Uses SQLite (no database server needed), DEBUG=True, relaxed security.
DO NOT use in production.
"""

from .settings import *  # noqa: F401,F403
from .settings import BASE_DIR

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = "dev-insecure-key-change-in-production-do-not-use"

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

ALLOWED_HOSTS = ["*"]

# ── Database: SQLite for dev ──────────────────────────────────────────────────
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

PIN_SECRET       = "dev-pin-secret"
ADMIN_PIN_SECRET = PIN_SECRET

SPECTACULAR_SETTINGS = {
    "TITLE": "Moon Cargo API (Dev)",
    "DESCRIPTION": "Development build — Moon Cargo",
    "VERSION": "dev",
}

# Dev logging: verbose, human-readable (not JSON)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        }
    },
    "formatters": {
        "verbose": {
            "format": "[{levelname}] {name}: {message}",
            "style": "{",
        }
    },
    "root": {"handlers": ["console"], "level": "DEBUG"},
}
