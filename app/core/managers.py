"""
Custom QuerySet and Manager classes for soft-deletable models.

Manager vs QuerySet:
    - QuerySet: Defines chainable methods (filter, exclude, etc.)
    - Manager: Attaches QuerySet to model, defines table-level operations

Usage:
    from core.managers import SoftDeleteManager, SoftDeleteQuerySet

    class Message(SoftDeleteMixin, BaseModel):
        objects = SoftDeleteQuerySet.as_manager()  # Includes deleted
        active = SoftDeleteManager()  # Excludes deleted

    # Bulk soft delete
    Message.objects.filter(chat_id=chat_id).delete()

    # Explicit filtering
    Message.objects.deleted()
    Message.active.all()

Related:
    - core.model_mixins.SoftDeleteMixin: Model mixin for soft delete fields
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    QuerySet that provides soft delete operations.

    Methods:
        delete(): Soft delete (marks is_deleted=True)
        hard_delete(): Permanent delete
        restore(): Restore soft-deleted records
        deleted(): Filter to only deleted records
        active(): Filter to only active records

    Note:
        Filtering of deleted records happens in SoftDeleteManager, not in
        this QuerySet, so a default manager built from it sees every row.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """
        Soft delete all objects in queryset.

        Marks matching records as deleted without removing them.
        Already deleted records keep their original deleted_at.

        Returns:
            Tuple of (count, {model_label: count}) matching Django's delete()
        """
        count = self.filter(is_deleted=False).update(
            is_deleted=True,
            deleted_at=timezone.now(),
            updated_at=timezone.now(),
        )
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        """
        Permanently delete all objects in queryset.

        Warning:
            This cannot be undone.
        """
        return super().delete()

    def restore(self) -> int:
        """Restore all soft-deleted objects in queryset."""
        return self.filter(is_deleted=True).update(is_deleted=False, deleted_at=None)

    def deleted(self) -> SoftDeleteQuerySet:
        """Filter to only soft-deleted records."""
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        """Filter to only active (non-deleted) records."""
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager):
    """
    Manager that filters out soft-deleted records.

    Usage:
        class Message(SoftDeleteMixin, BaseModel):
            objects = SoftDeleteQuerySet.as_manager()
            active = SoftDeleteManager()

        Message.active.filter(chat=chat)  # Only live messages
    """

    def get_queryset(self) -> SoftDeleteQuerySet:
        """
        Return queryset excluding soft-deleted records.

        Returns:
            SoftDeleteQuerySet filtered to is_deleted=False
        """
        return SoftDeleteQuerySet(self.model, using=self._db).filter(is_deleted=False)
