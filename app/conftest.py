"""
Project-wide pytest configuration.

Settings overrides for the test run live here; fixtures live in each
app's tests/conftest.py and model factories in tests/factories.py.
"""

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    django.setup()

    from django.conf import settings

    from config.celery import app as celery_app

    # Throttling would make view tests order-dependent
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

    # No Redis in the test environment
    settings.CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}}
    settings.SESSION_ENGINE = "django.contrib.sessions.backends.db"

    # The test client speaks plain HTTP
    settings.SECURE_SSL_REDIRECT = False

    # Tasks run inline so queued emails land in the locmem outbox
    celery_app.conf.update(task_always_eager=True, task_eager_propagates=True)


UNIT_TEST_FILES = {
    "test_models.py",
    "test_managers.py",
    "test_soft_delete_mixin.py",
    "test_tokens.py",
    "test_error_codes.py",
}


def pytest_collection_modifyitems(items):
    """
    Mark tests as unit or integration by file name.

    Model, manager and token tests are unit tests; handler, query, task
    and view tests are integration tests. Explicit markers win.
    """
    for item in items:
        if {m.name for m in item.iter_markers()} & {"unit", "integration"}:
            continue
        if item.path.name in UNIT_TEST_FILES:
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)
