"""
Mentions application configuration.

This app owns the shortname registry shared by users and public groups.
"""

from django.apps import AppConfig


class MentionsConfig(AppConfig):
    """Configuration for the mentions application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "mentions"
    verbose_name = "Mentions"
