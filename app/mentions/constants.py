"""Shortname limits."""

SHORTNAME_MIN_LENGTH = 4
SHORTNAME_MAX_LENGTH = 64
SHORTNAME_PATTERN = r"^[A-Za-z0-9_]+$"

SHORTNAME_TAKEN_MESSAGE = "Shortname has already been taken"
