"""
Celery application.

Workers run two kinds of jobs:
- Confirmation emails, queued once the registering transaction commits
- Periodic cleanup of expired and long-revoked refresh tokens, scheduled
  through django-celery-beat (see accounts/migrations/0002_*)

Settings prefixed with ``CELERY_`` in config/settings.py configure the
app; task modules are discovered in every installed app.

Run:
    celery -A config worker -l info
    celery -A config beat -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("chat_backend")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
