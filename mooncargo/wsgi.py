"""WSGI entry point for Moon Cargo."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mooncargo.settings")

application = get_wsgi_application()
