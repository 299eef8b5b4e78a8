"""Field limits and fixed values for accounts."""

NAME_MAX_LENGTH = 64
BIO_MAX_LENGTH = 2048
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 24
CONFIRMATION_CODE_LENGTH = 6

DELETED_USER_NAME = "Deleted User"

# Letters (incl. Latin-1 accents), spaces, apostrophes and hyphens
NAME_PATTERN = r"^[a-zA-ZÀ-ÿ\s'-]+$"

# Content rejected in user bios
FORBIDDEN_BIO_PATTERNS = (
    r"<\s*script",
    r"javascript\s*:",
    r"data\s*:\s*text/html",
    r"<\s*iframe",
    r"<\s*object",
)

# JWT claim marking a limited-purpose access token
TOKEN_PURPOSE_CLAIM = "purpose"
PROFILE_COMPLETION_PURPOSE = "pc"
