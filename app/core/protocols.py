"""
Protocol definitions for external infrastructure collaborators.

Protocols define contracts that implementations must fulfill, enabling:
- Duck typing with static type checking
- Dependency inversion (depend on abstractions, not concretions)
- Easy faking in tests

Available Protocols:
    AttachmentStore: Object storage for avatars and message attachments

Usage:
    from core.protocols import AttachmentStore, UploadResult

    class InMemoryAttachmentStore:
        def upload(self, file, folder): ...
        def destroy(self, public_id): ...

    # InMemoryAttachmentStore is a valid AttachmentStore
    # even without explicit inheritance (duck typing)
    store: AttachmentStore = InMemoryAttachmentStore()

Note:
    - @runtime_checkable allows isinstance() checks
    - The configured implementation is resolved by core.attachments
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from django.core.files import File


@dataclass(frozen=True)
class UploadResult:
    """
    Result of storing one file.

    Attributes:
        url: Public URL the file is served from
        public_id: Store-specific identifier used to destroy the file later
        bytes: Stored size in bytes
    """

    url: str
    public_id: str
    bytes: int


@runtime_checkable
class AttachmentStore(Protocol):
    """
    Protocol for attachment/avatar storage.

    Implementations raise core.exceptions.ExternalServiceError when the
    underlying store fails.

    Example:
        result = store.upload(request.FILES["avatar"], folder="avatars")
        user.avatar = {"url": result.url, "public_id": result.public_id}
        ...
        store.destroy(user.avatar["public_id"])
    """

    def upload(self, file: File, folder: str) -> UploadResult:
        """
        Store a file under a folder.

        Args:
            file: Uploaded file (Django File / UploadedFile)
            folder: Logical folder, e.g. "avatars" or "chat_attachments"

        Returns:
            UploadResult describing the stored file
        """
        ...

    def destroy(self, public_id: str) -> None:
        """
        Remove a previously stored file.

        Destroying an unknown public_id is not an error.

        Args:
            public_id: Identifier returned by upload()
        """
        ...
