"""
Typed message payloads.

Each message type carries exactly one kind of content. The payload classes
make that explicit: build one from the message_type discriminator, then let
it write its content onto a Message.

    text   -> TextPayload(text)
    image  -> ImagePayload(items)            -> Message.images
    video  -> VideoPayload(item)             -> Message.attachment
    audio  -> AudioPayload(item)             -> Message.attachment
    file   -> FilePayload(item)              -> Message.attachment

Usage:
    payload = build_payload(MessageType.IMAGE, descriptors=[...])
    payload.apply(message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chat.models import MessageType
from core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chat.models import Message


@dataclass(frozen=True)
class TextPayload:
    text: str

    message_type = MessageType.TEXT

    def apply(self, message: Message) -> None:
        message.message_type = self.message_type
        message.text = self.text


@dataclass(frozen=True)
class ImagePayload:
    """One or more image descriptors, kept in upload order."""

    items: tuple[dict, ...]

    message_type = MessageType.IMAGE

    def apply(self, message: Message) -> None:
        message.message_type = self.message_type
        message.images = list(self.items)


@dataclass(frozen=True)
class _SingleAttachmentPayload:
    item: dict

    message_type = MessageType.FILE

    def apply(self, message: Message) -> None:
        message.message_type = self.message_type
        message.attachment = self.item


class VideoPayload(_SingleAttachmentPayload):
    message_type = MessageType.VIDEO


class AudioPayload(_SingleAttachmentPayload):
    message_type = MessageType.AUDIO


class FilePayload(_SingleAttachmentPayload):
    message_type = MessageType.FILE


_SINGLE_ATTACHMENT_PAYLOADS = {
    MessageType.VIDEO: VideoPayload,
    MessageType.AUDIO: AudioPayload,
    MessageType.FILE: FilePayload,
}


def validate_content(message_type: str, text: str | None, file_count: int) -> None:
    """
    Check that a message type and its raw content agree.

    Runs before any upload so bad requests never touch the attachment store.

    Raises:
        ValidationError: Unknown type, missing text or missing file
    """
    if message_type not in MessageType.values:
        raise ValidationError("Invalid message type")
    if message_type == MessageType.TEXT:
        if not text:
            raise ValidationError("Text is required for text messages")
    elif file_count < 1:
        raise ValidationError("File is required for file messages")


def build_payload(
    message_type: str,
    text: str | None = None,
    descriptors: Sequence[dict] = (),
):
    """
    Build the payload for a message type.

    Args:
        message_type: One of MessageType values
        text: Body of text messages
        descriptors: Attachment descriptors {url, public_id, name, size}
            in upload order

    Raises:
        ValidationError: Unknown type, missing text or missing attachment
    """
    validate_content(message_type, text, len(descriptors))

    if message_type == MessageType.TEXT:
        return TextPayload(text=text)
    if message_type == MessageType.IMAGE:
        return ImagePayload(items=tuple(descriptors))
    return _SINGLE_ATTACHMENT_PAYLOADS[message_type](item=descriptors[0])
