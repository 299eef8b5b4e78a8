"""
Celery tasks for accounts.

This module defines async tasks for:
- Sending email confirmation codes
- Removing expired refresh tokens
- Removing refresh tokens revoked long ago

Related files:
    - services.py: Handlers that queue send_confirmation_email after commit
    - migrations/0002_add_token_cleanup_schedules.py: celery-beat schedules

Usage:
    from accounts.tasks import send_confirmation_email
    send_confirmation_email.delay(str(user.id))
"""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_confirmation_email(self, user_id: str) -> bool:
    """
    Send the pending confirmation code to the user.

    Args:
        user_id: ID of the user to send the code to

    Returns:
        True if the email was sent, False if there was nothing to send
    """
    from accounts.emails import (
        CONFIRMATION_EMAIL_SUBJECT,
        CONFIRMATION_EMAIL_TEMPLATE,
        EmailService,
    )
    from accounts.models import User

    user = User.objects.filter(pk=user_id).first()
    if user is None:
        logger.error(f"User {user_id} not found for confirmation email")
        return False
    if user.email_confirmed or not user.has_pending_confirmation():
        logger.info(f"No pending confirmation code for user {user_id}")
        return False

    EmailService.send(
        to=user.email,
        subject=CONFIRMATION_EMAIL_SUBJECT,
        template_name=CONFIRMATION_EMAIL_TEMPLATE,
        context={
            "firstname": user.firstname,
            "code": user.email_confirmation_token,
            "ttl_minutes": settings.CONFIRMATION_CODE_TTL_MINUTES,
        },
    )
    logger.info(f"Confirmation email sent to user {user_id}")
    return True


@shared_task
def cleanup_expired_refresh_tokens() -> int:
    """
    Delete refresh tokens past their expiry.

    Should be scheduled to run daily via Celery Beat.

    Returns:
        Number of tokens deleted
    """
    from accounts.models import RefreshToken

    count, _ = RefreshToken.objects.expired().delete()
    logger.info(f"Deleted {count} expired refresh tokens")
    return count


@shared_task
def cleanup_revoked_refresh_tokens(older_than_days: int | None = None) -> int:
    """
    Delete refresh tokens revoked more than ``older_than_days`` ago.

    Returns:
        Number of tokens deleted
    """
    from accounts.models import RefreshToken

    days = older_than_days if older_than_days is not None else settings.REVOKED_TOKEN_RETENTION_DAYS
    cutoff = timezone.now() - timedelta(days=days)
    count, _ = RefreshToken.objects.revoked_before(cutoff).delete()
    logger.info(f"Deleted {count} refresh tokens revoked before {cutoff.isoformat()}")
    return count
