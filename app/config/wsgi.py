"""
WSGI entry point (gunicorn and other WSGI servers). Uvicorn uses asgi.py.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
