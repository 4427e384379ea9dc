"""
Attachment store backed by Django's storage API.

Provides the default core.protocols.AttachmentStore implementation and the
factory used by services to obtain the configured store.

Backend selection:
    settings.ATTACHMENT_STORE_BACKEND is a dotted path to a class with a
    no-argument constructor. The default writes through default_storage,
    so switching to S3 is a STORAGES change, not a code change.

Usage:
    from core.attachments import get_attachment_store

    store = get_attachment_store()
    result = store.upload(uploaded_file, folder="avatars")
    store.destroy(result.public_id)
"""

from __future__ import annotations

import logging
import posixpath
import uuid
from functools import lru_cache
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string
from django.utils.text import get_valid_filename

from core.exceptions import ExternalServiceError
from core.protocols import UploadResult

if TYPE_CHECKING:
    from django.core.files import File

    from core.protocols import AttachmentStore

logger = logging.getLogger(__name__)


class DefaultStorageAttachmentStore:
    """
    AttachmentStore writing to django.core.files.storage.default_storage.

    Files land at `<folder>/<uuid>/<original name>`; the storage name is the
    public_id, which is all destroy() needs.
    """

    def upload(self, file: File, folder: str) -> UploadResult:
        """Save the file and return its URL, storage name and size."""
        original_name = posixpath.basename(getattr(file, "name", "") or "upload")
        name = posixpath.join(
            folder, uuid.uuid4().hex, get_valid_filename(original_name)
        )
        try:
            stored_name = default_storage.save(name, file)
            url = default_storage.url(stored_name)
            size = default_storage.size(stored_name)
        except (OSError, ValueError) as exc:
            logger.warning(f"Attachment upload to {folder} failed: {exc}")
            raise ExternalServiceError(
                "Attachment upload failed",
                details={"folder": folder},
            ) from exc

        return UploadResult(url=url, public_id=stored_name, bytes=size)

    def destroy(self, public_id: str) -> None:
        """Delete the stored file; missing files are ignored by the storage."""
        try:
            default_storage.delete(public_id)
        except OSError as exc:
            logger.warning(f"Attachment destroy for {public_id} failed: {exc}")
            raise ExternalServiceError(
                "Attachment removal failed",
                details={"public_id": public_id},
            ) from exc


@lru_cache(maxsize=1)
def get_attachment_store() -> AttachmentStore:
    """
    Get the configured attachment store instance.

    Returns:
        Instance of settings.ATTACHMENT_STORE_BACKEND
    """
    store_class = import_string(settings.ATTACHMENT_STORE_BACKEND)
    return store_class()


@receiver(setting_changed)
def _reset_attachment_store(sender, setting, **kwargs):
    """Drop the cached store when tests override the backend setting."""
    if setting == "ATTACHMENT_STORE_BACKEND":
        get_attachment_store.cache_clear()
