"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks shared by the domain apps
(authentication, chat, friends). No domain logic lives here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)

Managers (import from core.managers):
    - SoftDeleteQuerySet: QuerySet whose delete() is a soft delete
    - SoftDeleteManager: Manager excluding deleted records

Services (import from core.services):
    - BaseService: Logger and transaction helpers for service classes

Exceptions (import from core.exceptions):
    - ValidationError, NotFoundError, ForbiddenError, ConflictError,
      InternalError, ExternalServiceError
    - exception_handler: DRF exception handler

Attachments (import from core.protocols / core.attachments):
    - AttachmentStore, UploadResult: Storage contract
    - get_attachment_store: Configured store instance

Views (import from core.views):
    - health_check: Database and cache probe
"""
