"""
Result type and base class shared by every service and handler.

Expected failures (a guard that does not hold, a taken shortname,
invalid input) are returned as a failed ServiceResult. Unexpected ones
(database down, bugs) are raised and rolled back by the caller.

Usage:
    from core.services import BaseService, ServiceResult

    class MentionService(BaseService):
        @classmethod
        def bind_to_chat(cls, chat, shortname) -> ServiceResult[ChatMention]:
            if cls.is_taken(shortname):
                return ServiceResult.failure(
                    "Shortname has already been taken",
                    error_code=ErrorCode.SHORTNAME_ALREADY_TAKEN,
                )
            ...
            return ServiceResult.success(mention)

    result = MentionService.bind_to_chat(chat, "compilers")
    if not result:
        return result

Related:
    - core.handlers: Guarded command/query handlers built on BaseService
    - core.responses: ServiceResult -> DRF Response
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service call or handler.

    Truthy on success. A failure carries a human-readable ``error``
    (part of the public API), a machine-readable ``error_code`` and, for
    validation failures, per-field ``errors``.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = None

    @classmethod
    def success(cls, data: T = None) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        return cls(success=False, error=error, error_code=error_code, errors=errors)

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Failed result describing ``exc``.

        BaseApplicationError subclasses keep their own message and code;
        other exceptions use ``str(exc)`` and the upper-cased class name.
        """
        return cls.failure(
            getattr(exc, "message", str(exc)),
            error_code=error_code or getattr(exc, "error_code", None) or type(exc).__name__.upper(),
        )

    def map(self, func: Callable[[T], Any]) -> ServiceResult:
        """Apply ``func`` to the data of a successful result."""
        if self.success and self.data is not None:
            return ServiceResult.success(func(self.data))
        return self

    def to_response(self) -> dict[str, Any]:
        """
        Response envelope.

        Success: {"success": true, "data": ...}
        Failure: {"success": false, "error": ..., "error_code"?: ..., "errors"?: {...}}
        """
        if self.success:
            return {"success": True, "data": self.data}

        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.error_code:
            body["error_code"] = self.error_code
        if self.errors:
            body["errors"] = self.errors
        return body

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Stateless service: classmethods only, one logger per class.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named ``<module>.<class>``, e.g. ``chat.services.CreateGroupHandler``."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the block in a transaction (a savepoint when nested).

        Example:
            with cls.atomic():
                chat = Chat.objects.create(type=ChatType.GROUP, name=name)
                ChatMember.objects.create(chat=chat, user=user, role=ChatRole.CREATOR)
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Log ``exc`` with its traceback and turn it into a failed result.

        For side effects that run after the request transaction has
        committed (queueing an email). Handlers themselves re-raise.
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(log_level, message, exc_info=True)
        return ServiceResult.from_exception(exc)
