"""Serializer fields shared by every validator that accepts a shortname."""

from django.core.validators import RegexValidator
from rest_framework import serializers

from mentions.constants import SHORTNAME_MAX_LENGTH, SHORTNAME_MIN_LENGTH, SHORTNAME_PATTERN


class ShortnameField(serializers.CharField):
    """
    Shortname: 4-64 characters of letters, digits and underscores.

    Uniqueness is not checked here; handlers check it in guard order.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("min_length", SHORTNAME_MIN_LENGTH)
        kwargs.setdefault("max_length", SHORTNAME_MAX_LENGTH)
        super().__init__(**kwargs)
        self.validators.append(
            RegexValidator(
                SHORTNAME_PATTERN,
                message="Shortname may contain only letters, digits and underscores",
                code="INVALID_SHORTNAME",
            )
        )
