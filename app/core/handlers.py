"""
Guarded command and query handlers.

Every state-changing operation follows the same shape:

    1. Validate the command with its validator (a DRF Serializer).
       Failures are returned per field and the handler never runs.
    2. Open a transaction.
    3. Load actor and targets, evaluate guards in a fixed order.
       The first failing guard wins; later guards and the mutation
       never run.
    4. On a guard failure, mark the transaction for rollback and
       return the failed ServiceResult.
    5. On success, mutate and commit when the atomic block exits.
    6. Any exception rolls back, is logged with a traceback and
       re-raised.

Usage:
    @dataclass(frozen=True)
    class SendMessageCommand:
        user_id: UUID
        chat_id: UUID
        text: str

    class SendMessageHandler(CommandHandler):
        validator_class = SendMessageValidator

        @classmethod
        def execute(cls, command: SendMessageCommand) -> ServiceResult[Message]:
            chat = Chat.all_objects.filter(pk=command.chat_id).first()
            if chat is None:
                return cls.reject("Chat not found", ErrorCode.CHAT_NOT_FOUND)
            ...
            return ServiceResult.success(message)

    result = SendMessageHandler.handle(SendMessageCommand(...))
"""

from __future__ import annotations

from dataclasses import MISSING, asdict, fields, replace
from typing import TYPE_CHECKING, ClassVar

from django.db import transaction

from core.error_codes import ErrorCode
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from typing import Any

    from rest_framework import serializers


class CommandHandler(BaseService):
    """
    Base class for guarded transition handlers.

    Subclasses set ``validator_class`` and implement ``execute``.
    ``execute`` runs inside the transaction and returns a ServiceResult;
    a failed result rolls the transaction back.
    """

    validator_class: ClassVar[type[serializers.Serializer] | None] = None
    atomic_execution: ClassVar[bool] = True

    @classmethod
    def handle(cls, command: Any) -> ServiceResult:
        """
        Validate, then execute the command inside a transaction.

        Args:
            command: Dataclass instance describing the operation

        Returns:
            ServiceResult from ``execute`` or a VALIDATION_ERROR failure

        Raises:
            Exception: Any infrastructure error, after rollback and logging
        """
        logger = cls.get_logger()
        command_name = type(command).__name__

        validation = cls.validate(command)
        if not validation:
            logger.info(f"{command_name} rejected by validator: {validation.errors}")
            return validation
        if validation.data:
            command = replace(command, **validation.data)

        try:
            if cls.atomic_execution:
                with cls.atomic():
                    result = cls.execute(command)
                    if not result:
                        transaction.set_rollback(True)
            else:
                result = cls.execute(command)
        except Exception:
            logger.exception(f"{command_name} failed with an unexpected error")
            raise

        if result:
            logger.info(f"{command_name} handled")
        return result

    @classmethod
    def validate(cls, command: Any) -> ServiceResult[dict]:
        """
        Run the validator over the command's fields.

        Returns:
            Success with the validated values, or a VALIDATION_ERROR
            failure carrying per-field messages
        """
        if cls.validator_class is None:
            return ServiceResult.success({})

        # Unset optional fields are omitted so "required" errors read naturally
        data = {name: value for name, value in asdict(command).items() if value is not None}
        validator = cls.validator_class(data=data)
        if validator.is_valid():
            return ServiceResult.success(dict(validator.validated_data))

        errors = {
            field: [str(message) for message in messages]
            for field, messages in validator.errors.items()
        }
        return ServiceResult.failure(
            "Validation failed",
            error_code=ErrorCode.VALIDATION_ERROR,
            errors=errors,
        )

    @classmethod
    def execute(cls, command: Any) -> ServiceResult:
        raise NotImplementedError(f"{cls.__name__} must implement execute()")

    @classmethod
    def reject(cls, message: str, error_code: str) -> ServiceResult:
        """Fail a guard: log it and build the failed result."""
        cls.get_logger().warning(f"{cls.__name__} guard failed: {error_code} ({message})")
        return ServiceResult.failure(message, error_code=error_code)


class QueryHandler(CommandHandler):
    """Read-only handler. Same validation and guards, no transaction."""

    atomic_execution = False


def command_from_data(command_class: type, data: Any, **overrides: Any) -> Any:
    """
    Build a command dataclass from request data.

    Keys that are not fields of ``command_class`` are ignored and missing
    fields are passed as None; the handler's validator reports them.
    ``overrides`` (typically the authenticated user id or URL kwargs)
    take precedence over ``data``.
    """
    values = {}
    for command_field in fields(command_class):
        name = command_field.name
        provided = data.get(name) if hasattr(data, "get") else None
        if name in overrides:
            values[name] = overrides[name]
        elif provided is not None:
            values[name] = provided
        elif command_field.default is not MISSING:
            values[name] = command_field.default
        else:
            values[name] = None
    return command_class(**values)
