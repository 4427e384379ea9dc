"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Error Handling:
    Services validate and fail fast by raising core.exceptions errors
    (ValidationError, NotFoundError, ForbiddenError, ConflictError,
    InternalError). Errors raised inside `atomic()` roll the whole unit of
    work back. The DRF exception handler maps them to responses.

Usage:
    from core.exceptions import ConflictError
    from core.services import BaseService

    class UserService(BaseService):
        @classmethod
        def signup(cls, email: str, password: str) -> User:
            if User.objects.filter(email__iexact=email).exists():
                raise ConflictError("Email already exists")

            with cls.atomic():
                user = User.objects.create_user(email=email, password=password)

            cls.get_logger().info(f"Created user {user.id}")
            return user

Related:
    - core.exceptions: Error taxonomy and DRF exception handler
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Services are stateless; expose operations as classmethods.

    Methods:
        get_logger: Logger named after the concrete service class
        atomic: Transaction boundary for multi-row mutations
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get a logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Returns:
            Logger instance for this service

        Example:
            class ChatService(BaseService):
                @classmethod
                def delete_chat(cls, user, chat_id):
                    cls.get_logger().info(f"Deleting chat {chat_id}")
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation raises, all
        changes are rolled back and the exception propagates.

        Yields:
            None

        Example:
            with cls.atomic():
                Message.objects.filter(chat_id=chat.id).update(is_deleted=True)
                chat.delete()
                # If chat.delete() fails, the messages stay undeleted

        Note:
            Nested calls create savepoints, as transaction.atomic() does.
        """
        with transaction.atomic():
            yield
