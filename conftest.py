"""
pytest configuration for Moon Cargo.
Sets Django settings and provides shared fixtures.
"""

from decimal import Decimal

import pytest
from django.conf import settings


def pytest_configure(config):
    """Configure Django settings before tests run."""
    if not settings.configured:
        settings.configure(
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME":   ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.sessions",
                "django.contrib.messages",
                "django.contrib.staticfiles",
                "rest_framework",
                "drf_spectacular",
                "django_filters",
                "corsheaders",
                "django_prometheus",
                "apps.pins",
                "apps.shipments",
                "apps.payments",
                "apps.content",
                "apps.analytics",
                "apps.ops",
            ],
            REST_FRAMEWORK={
                "DEFAULT_AUTHENTICATION_CLASSES": [],
                "DEFAULT_PERMISSION_CLASSES": [
                    "rest_framework.permissions.AllowAny",
                ],
                "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
                "EXCEPTION_HANDLER": "apps.common.exceptions.cargo_exception_handler",
                "COERCE_DECIMAL_TO_STRING": False,
                "UNAUTHENTICATED_USER": None,
            },
            SPECTACULAR_SETTINGS={
                "TITLE": "Moon Cargo API",
                "VERSION": "1.0.0",
                "SERVE_INCLUDE_SCHEMA": False,
            },
            SECRET_KEY="test-secret-key-not-for-production",
            DEBUG=True,
            USE_TZ=True,
            TIME_ZONE="Asia/Ulaanbaatar",
            ROOT_URLCONF="mooncargo.urls",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            TEMPLATES=[{
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [],
                "APP_DIRS": True,
                "OPTIONS": {
                    "context_processors": [
                        "django.template.context_processors.debug",
                        "django.template.context_processors.request",
                        "django.contrib.auth.context_processors.auth",
                        "django.contrib.messages.context_processors.messages",
                    ],
                },
            }],
            MIDDLEWARE=[
                "django.middleware.security.SecurityMiddleware",
                "corsheaders.middleware.CorsMiddleware",
                "django.contrib.sessions.middleware.SessionMiddleware",
                "django.middleware.common.CommonMiddleware",
                "django.middleware.csrf.CsrfViewMiddleware",
                "django.contrib.auth.middleware.AuthenticationMiddleware",
                "django.contrib.messages.middleware.MessageMiddleware",
            ],
            STATIC_URL="/static/",
            STATIC_ROOT="/tmp/staticfiles_test",
            CORS_ALLOW_ALL_ORIGINS=True,
            PIN_SECRET="test-pin-secret",
            ADMIN_PIN_SECRET="test-admin-secret",
            PIN_HOTLINE="99205050",
            SHIPMENTS_PAGE_SIZE=20,
            SHIPMENTS_MAX_PAGE_SIZE=200,
        )


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def make_shipment(db):
    """Insert a shipment row directly, bypassing the ledger."""
    from apps.shipments.models import Shipment

    def _make(barcode="MC-1", phone="", price="0", paid_amount="0", **kwargs):
        shipment = Shipment(
            barcode=barcode,
            phone=phone,
            price=Decimal(price),
            paid_amount=Decimal(paid_amount),
            **kwargs,
        )
        shipment.recompute_balance()
        shipment.save()
        return shipment
    return _make
