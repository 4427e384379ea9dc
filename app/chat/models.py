"""
Chat system models.

This module defines the data models for the chat system supporting:
- Private chats between exactly two users
- Group chats with a single admin, a name and an optional avatar

Models:
    Chat: Container for messages between members
    Message: Individual message within a chat, typed by message_type
    MessageReaction: One reaction per user per message

Design Decisions:
    - Chat.is_group is fixed at creation; private membership never changes
    - Members are a set (many-to-many), never a list with duplicates
    - Messages are soft deleted; deleting a chat soft deletes its messages
      and the message rows outlive the chat row (no FK constraint to chat)
    - Chat.latest_message is a denormalized pointer for list previews
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.managers import SoftDeleteManager, SoftDeleteQuerySet
from core.model_mixins import SoftDeleteMixin
from core.models import BaseModel


class MessageType(models.TextChoices):
    """
    Discriminator for message content.

    TEXT: `text` holds the body
    IMAGE: `images` holds one or more attachment descriptors
    VIDEO / AUDIO / FILE: `attachment` holds a single descriptor
    """

    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    VIDEO = "video", "Video"
    AUDIO = "audio", "Audio"
    FILE = "file", "File"


class ReactionType(models.TextChoices):
    """Allowed message reactions."""

    LIKE = "like", "Like"
    LOVE = "love", "Love"
    HAHA = "haha", "Haha"
    WOW = "wow", "Wow"
    SAD = "sad", "Sad"
    ANGRY = "angry", "Angry"


class Chat(BaseModel):
    """
    A private or group chat.

    Private chats (is_group=False):
        - Exactly two members, fixed for the chat's lifetime
        - No name, admin or avatar; cannot be updated, deleted or left

    Group chats (is_group=True):
        - At least three members at creation
        - One admin (the creator until reassigned)
        - Deleted when the last member leaves

    updated_at doubles as the activity marker: sending a message touches it,
    so ordering by -updated_at lists the busiest chats first.
    """

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="chats",
        help_text="Users in this chat",
    )
    is_group = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Group chat (True) or private chat (False); immutable",
    )
    group_name = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Display name for group chats",
    )
    group_admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="administered_chats",
        help_text="Group admin; null for private chats",
    )
    group_avatar = models.JSONField(
        default=dict,
        blank=True,
        help_text='Stored avatar descriptor: {"url": ..., "public_id": ...}',
    )
    latest_message = models.ForeignKey(
        "chat.Message",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Most recent message for previews; cleared on any message delete",
    )

    class Meta:
        db_table = "chat_chat"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["-updated_at"], name="chat_chat_updated_idx"),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        if self.is_group:
            return f"Group: {self.group_name}" if self.group_name else f"Group({self.pk})"
        return f"Private({self.pk})"

    @property
    def is_private(self) -> bool:
        return not self.is_group

    def has_member(self, user) -> bool:
        """Check membership for a user or user id."""
        user_id = getattr(user, "pk", user)
        return self.members.filter(pk=user_id).exists()

    def member_ids(self) -> set:
        return set(self.members.values_list("pk", flat=True))


class Message(SoftDeleteMixin, BaseModel):
    """
    A message in a chat.

    Content by message_type:
        text:              text
        image:             images -> [{url, public_id, name, size}, ...]
        video/audio/file:  attachment -> {url, public_id, name, size}

    Deletion is always soft. Message.objects sees deleted rows (chat
    history keeps them); Message.active hides them.
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="messages",
        help_text="Owning chat; rows are kept after the chat is deleted",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="messages",
        help_text="Author; null once the account is deleted",
    )
    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Which content field is populated",
    )
    text = models.TextField(
        blank=True,
        default="",
        help_text="Body of text messages",
    )
    images = models.JSONField(
        default=list,
        blank=True,
        help_text="Attachment descriptors of image messages",
    )
    attachment = models.JSONField(
        null=True,
        blank=True,
        help_text="Attachment descriptor of video, audio and file messages",
    )
    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
        help_text="Message this one replies to",
    )

    objects = SoftDeleteQuerySet.as_manager()
    active = SoftDeleteManager()

    class Meta:
        db_table = "chat_message"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["chat", "-created_at"],
                name="chat_msg_chat_created_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Message({self.pk}, {self.message_type}, chat={self.chat_id})"


class MessageReaction(BaseModel):
    """
    A user's reaction to a message.

    At most one per (message, user): reacting again with the same type
    removes it, with another type replaces it.
    """

    message = models.ForeignKey(
        Message,
        on_delete=models.CASCADE,
        related_name="reactions",
        help_text="Message reacted to",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="message_reactions",
        help_text="User who reacted",
    )
    reaction_type = models.CharField(
        max_length=10,
        choices=ReactionType.choices,
        help_text="Reaction kind",
    )

    class Meta:
        db_table = "chat_message_reaction"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["message", "user"],
                name="unique_reaction_per_user_message",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Reaction({self.user_id} {self.reaction_type} on {self.message_id})"
