"""
Machine-readable error codes and their HTTP status mapping.

Every failed ServiceResult carries one of these codes. Views translate
the code into an HTTP status with ``http_status_for`` so that handlers
never deal with HTTP concerns.

Kinds:
    not found            -> 404
    validation/business  -> 400
    auth                 -> 401
    conflict             -> 409
    deleted              -> 410
    infrastructure       -> 500
    external service     -> 503
"""

from __future__ import annotations

from rest_framework import status


class ErrorCode:
    """Error code constants shared by every app."""

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Not found
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CHAT_NOT_FOUND = "CHAT_NOT_FOUND"
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"
    MESSAGE_NOT_FOUND = "MESSAGE_NOT_FOUND"
    EMAIL_NOT_REGISTERED = "EMAIL_NOT_REGISTERED"
    CONFIRMATION_CODE_NOT_FOUND = "CONFIRMATION_CODE_NOT_FOUND"

    # Business preconditions
    USER_NOT_VERIFIED = "USER_NOT_VERIFIED"
    NOT_A_GROUP = "NOT_A_GROUP"
    NOT_A_MEMBER = "NOT_A_MEMBER"
    NOT_A_CREATOR = "NOT_A_CREATOR"
    CHAT_ACCESS_DENIED = "CHAT_ACCESS_DENIED"
    NOT_MESSAGE_AUTHOR = "NOT_MESSAGE_AUTHOR"
    GROUP_ALREADY_PUBLIC = "GROUP_ALREADY_PUBLIC"
    GROUP_ALREADY_PRIVATE = "GROUP_ALREADY_PRIVATE"
    NO_CHANGES_DETECTED = "NO_CHANGES_DETECTED"
    EMAIL_NOT_CONFIRMED = "EMAIL_NOT_CONFIRMED"
    CONFIRMATION_CODE_EXPIRED = "CONFIRMATION_CODE_EXPIRED"
    INVALID_CONFIRMATION_CODE = "INVALID_CONFIRMATION_CODE"
    ACCOUNT_ALREADY_COMPLETED = "ACCOUNT_ALREADY_COMPLETED"

    # Auth
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCESS_FORBIDDEN = "ACCESS_FORBIDDEN"
    REFRESH_TOKEN_NOT_FOUND = "REFRESH_TOKEN_NOT_FOUND"
    REFRESH_TOKEN_REVOKED = "REFRESH_TOKEN_REVOKED"
    REFRESH_TOKEN_EXPIRED = "REFRESH_TOKEN_EXPIRED"

    # Conflict
    CHAT_ALREADY_EXISTS = "CHAT_ALREADY_EXISTS"
    SHORTNAME_ALREADY_TAKEN = "SHORTNAME_ALREADY_TAKEN"
    EMAIL_ALREADY_USED = "EMAIL_ALREADY_USED"
    EMAIL_ALREADY_CONFIRMED = "EMAIL_ALREADY_CONFIRMED"
    EMAIL_AWAITING_CONFIRMATION = "EMAIL_AWAITING_CONFIRMATION"

    # Gone
    USER_DELETED = "USER_DELETED"
    CHAT_DELETED = "CHAT_DELETED"
    GROUP_DELETED = "GROUP_DELETED"

    # Infrastructure
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


_STATUS_BY_CODE: dict[str, int] = {
    **dict.fromkeys(
        [
            ErrorCode.USER_NOT_FOUND,
            ErrorCode.CHAT_NOT_FOUND,
            ErrorCode.GROUP_NOT_FOUND,
            ErrorCode.MESSAGE_NOT_FOUND,
            ErrorCode.EMAIL_NOT_REGISTERED,
            ErrorCode.CONFIRMATION_CODE_NOT_FOUND,
        ],
        status.HTTP_404_NOT_FOUND,
    ),
    **dict.fromkeys(
        [
            ErrorCode.INVALID_CREDENTIALS,
            ErrorCode.ACCESS_FORBIDDEN,
            ErrorCode.REFRESH_TOKEN_NOT_FOUND,
            ErrorCode.REFRESH_TOKEN_REVOKED,
            ErrorCode.REFRESH_TOKEN_EXPIRED,
        ],
        status.HTTP_401_UNAUTHORIZED,
    ),
    **dict.fromkeys(
        [
            ErrorCode.CHAT_ALREADY_EXISTS,
            ErrorCode.SHORTNAME_ALREADY_TAKEN,
            ErrorCode.EMAIL_ALREADY_USED,
            ErrorCode.EMAIL_ALREADY_CONFIRMED,
            ErrorCode.EMAIL_AWAITING_CONFIRMATION,
        ],
        status.HTTP_409_CONFLICT,
    ),
    **dict.fromkeys(
        [
            ErrorCode.USER_DELETED,
            ErrorCode.CHAT_DELETED,
            ErrorCode.GROUP_DELETED,
        ],
        status.HTTP_410_GONE,
    ),
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def http_status_for(error_code: str | None) -> int:
    """
    Map an error code to an HTTP status.

    Unknown codes and business-precondition codes map to 400.
    """
    if error_code is None:
        return status.HTTP_400_BAD_REQUEST
    return _STATUS_BY_CODE.get(error_code, status.HTTP_400_BAD_REQUEST)
