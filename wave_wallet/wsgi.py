"""WSGI entry point for the wallet simulator."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wave_wallet.settings")

application = get_wsgi_application()
