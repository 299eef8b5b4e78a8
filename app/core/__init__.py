"""
Core Application - Infrastructure & Base Classes

Shared building blocks used by the accounts, mentions and chat apps.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key
    - SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)

Managers (import from core.managers):
    - SoftDeleteManager: Filter deleted records by default
    - SoftDeleteQuerySet: QuerySet with soft delete operations

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Handlers (import from core.handlers):
    - CommandHandler: Validate, guard and mutate inside one transaction
    - QueryHandler: Validate and guard a read-only query

Errors:
    - core.error_codes.ErrorCode: Machine-readable error codes
    - core.error_codes.http_status_for: Error code to HTTP status
    - core.exceptions: BaseApplicationError hierarchy
    - core.exception_handler: DRF exception handler (uniform envelope)
"""
