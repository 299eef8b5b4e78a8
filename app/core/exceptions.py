"""
Exceptions for failures that cannot be returned as a ServiceResult.

Handlers report expected failures through ServiceResult. These are
raised from code with no result to return, such as Celery tasks and
email delivery. ``core.exception_handler`` renders them with the same
envelope as handler failures when they reach a view.

Hierarchy:
    BaseApplicationError
    └── ExternalServiceError: SMTP or broker failure

Usage:
    from core.exceptions import ExternalServiceError

    raise ExternalServiceError(
        "Confirmation email could not be delivered",
        details={"user_id": str(user.id)},
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Error with a client-facing message, code and HTTP status.

    Subclasses override ``default_error_code`` and ``status_code``.
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Error envelope, with ``details`` only when there are any."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ExternalServiceError(BaseApplicationError):
    """An external dependency (SMTP server, broker) failed."""

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code = 503
