"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- A single mapping from domain failures to HTTP status codes

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed, missing or inconsistent input (400)
    ├── NotFoundError - Referenced entity absent (404)
    ├── ForbiddenError - Authenticated but not allowed on this entity (403)
    ├── ConflictError - State already satisfies/conflicts with request (400)
    └── InternalError - Storage or external-service failure (500)
        └── ExternalServiceError - Attachment store and other third parties

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Members are required")

    # Raise with error code for client handling
    raise ConflictError("Chat already exists", error_code="CHAT_EXISTS")

    # Raise with additional details
    raise NotFoundError(
        "User not found",
        error_code="USER_NOT_FOUND",
        details={"missing_ids": [12, 13]},
    )

Note:
    Services raise these; views never catch them. The DRF exception
    handler below turns them into responses with a stable `message` field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        status_code: HTTP status the API layer responds with

    Example:
        try:
            chat = ChatService.get_chat(user, chat_id)
        except NotFoundError as e:
            logger.warning(f"Chat lookup failed: {e.error_code}")
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with message, error_code, and details keys

        Example:
            {
                "message": "Chat not found",
                "error_code": "NOT_FOUND",
                "details": {"chat_id": 123}
            }
        """
        result: dict[str, Any] = {
            "message": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Missing required fields ("Members are required")
    - Business rule violations ("Group chat must have at least 3 members")
    - Operations not valid for the entity's variant ("Cannot delete private chat")
    - Terminal state re-entry ("Friend request already handled")

    Note:
        Request-shape validation stays in DRF serializers.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a referenced entity does not exist.

    Example:
        chat = Chat.objects.filter(id=chat_id).first()
        if chat is None:
            raise NotFoundError("Chat not found", details={"chat_id": chat_id})
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = status.HTTP_404_NOT_FOUND


class ForbiddenError(BaseApplicationError):
    """
    Raised when the requesting user is authenticated but not allowed.

    Use for:
    - Accessing a chat the user is not a member of
    - Admin-only group operations
    - Acting on another user's message or friend request

    Note:
        Missing/invalid credentials are DRF's NotAuthenticated (401).
    """

    default_error_code: str = "FORBIDDEN"
    status_code: int = status.HTTP_403_FORBIDDEN


class ConflictError(BaseApplicationError):
    """
    Raised when the current state already satisfies or contradicts the request.

    Use for:
    - Duplicate private chats
    - Duplicate pending friend requests, existing friendships
    - Email addresses already registered

    Note:
        Clients of this API expect 400 for conflicts, not 409.
    """

    default_error_code: str = "CONFLICT"


class InternalError(BaseApplicationError):
    """
    Raised when storage or an external collaborator fails.

    The message is shown to clients, so keep it generic and put the
    original error in `details` or the logs.
    """

    default_error_code: str = "INTERNAL_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class ExternalServiceError(InternalError):
    """
    Raised when an external service call fails.

    Example:
        try:
            default_storage.save(name, content)
        except OSError as e:
            raise ExternalServiceError(
                "Attachment upload failed",
                details={"service": "attachment_store"},
            ) from e
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"


def _flatten_detail(detail: Any) -> str:
    """Pick the first human-readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        if not detail:
            return "Invalid input"
        return _flatten_detail(next(iter(detail.values())))
    if isinstance(detail, list):
        return _flatten_detail(detail[0]) if detail else "Invalid input"
    return str(detail)


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """
    DRF exception handler producing `{"message": ...}` error bodies.

    - BaseApplicationError: its status_code and to_dict()
    - DRF APIException (and Http404/PermissionDenied): DRF's status, with
      field errors kept under "errors" for validation failures
    - Anything else: logged with traceback, generic 500

    Configured as REST_FRAMEWORK["EXCEPTION_HANDLER"].
    """
    if isinstance(exc, BaseApplicationError):
        if exc.status_code >= 500:
            logger.error(f"{exc!r} in {context.get('view').__class__.__name__}")
        return Response(exc.to_dict(), status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        body: dict[str, Any] = {"message": _flatten_detail(response.data)}
        if isinstance(exc, drf_exceptions.ValidationError):
            body["errors"] = response.data
        response.data = body
        return response

    logger.exception(
        f"Unhandled error in {context.get('view').__class__.__name__}",
        exc_info=exc,
    )
    return Response(
        {"message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
