"""
Email sending for accounts.

EmailService renders a template pair ({name}.html / {name}.txt) and
sends it through Django's configured EMAIL_BACKEND. Delivery errors are
raised as ExternalServiceError so the calling Celery task can retry.

Usage:
    from accounts.emails import EmailService

    EmailService.send(
        to=user.email,
        subject=CONFIRMATION_EMAIL_SUBJECT,
        template_name="accounts/emails/confirmation_code",
        context={"firstname": user.firstname, "code": user.email_confirmation_token},
    )
"""

from __future__ import annotations

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

CONFIRMATION_EMAIL_SUBJECT = "Code for confirm email"
CONFIRMATION_EMAIL_TEMPLATE = "accounts/emails/confirmation_code"


class EmailService:
    """Template-based email sending."""

    @staticmethod
    def send(
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict,
        from_email: str | None = None,
    ) -> None:
        """
        Render and send an email.

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            template_name: Template path without extension
            context: Template context variables
            from_email: Sender (defaults to DEFAULT_FROM_EMAIL)

        Raises:
            ExternalServiceError: If the backend fails to deliver
        """
        recipients = [to] if isinstance(to, str) else list(to)

        html_content = render_to_string(f"{template_name}.html", context)
        text_content = render_to_string(f"{template_name}.txt", context) or strip_tags(html_content)

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_content,
            from_email=from_email or settings.DEFAULT_FROM_EMAIL,
            to=recipients,
        )
        email.attach_alternative(html_content, "text/html")

        try:
            email.send(fail_silently=False)
        except (SMTPException, OSError) as exc:
            logger.error(f"Failed to send email to {recipients}: {exc}")
            raise ExternalServiceError(
                "Email delivery failed",
                error_code="EMAIL_DELIVERY_FAILED",
                details={"recipients": recipients},
            ) from exc

        logger.info(f"Email sent to {recipients}: {subject}")
