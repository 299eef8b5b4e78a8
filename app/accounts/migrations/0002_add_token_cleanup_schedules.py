"""
Add celery-beat schedules for refresh token cleanup.

Expired tokens are removed every hour; revoked tokens are removed once
a day after the retention period (REVOKED_TOKEN_RETENTION_DAYS).
"""

from django.db import migrations

EXPIRED_TASK_NAME = "Cleanup Expired Refresh Tokens"
REVOKED_TASK_NAME = "Cleanup Revoked Refresh Tokens"


def create_periodic_tasks(apps, schema_editor):
    """Create the periodic tasks for refresh token cleanup."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    hourly, _ = IntervalSchedule.objects.get_or_create(every=1, period="hours")
    daily, _ = IntervalSchedule.objects.get_or_create(every=1, period="days")

    PeriodicTask.objects.get_or_create(
        name=EXPIRED_TASK_NAME,
        defaults={
            "task": "accounts.tasks.cleanup_expired_refresh_tokens",
            "interval": hourly,
            "enabled": True,
            "description": "Deletes refresh tokens whose expiry has passed.",
        },
    )
    PeriodicTask.objects.get_or_create(
        name=REVOKED_TASK_NAME,
        defaults={
            "task": "accounts.tasks.cleanup_revoked_refresh_tokens",
            "interval": daily,
            "enabled": True,
            "description": "Deletes refresh tokens revoked before the retention period.",
        },
    )


def remove_periodic_tasks(apps, schema_editor):
    """Remove the periodic tasks on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name__in=[EXPIRED_TASK_NAME, REVOKED_TASK_NAME]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("accounts", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_tasks, remove_periodic_tasks),
    ]
