"""
Serializers for chat API.

This module provides serializers for the chat system:
- Chat serializers (read, create, update, leave)
- Message serializers (read, preview, create, list query, react)

Serializer Hierarchy:
    ChatSerializer: Chat with members, admin and latest message preview
    ChatCreateSerializer: Private/group chat creation
    ChatUpdateSerializer: Group patch (multipart for avatar)
    LeaveChatSerializer: Optional successor when the admin leaves

    MessageSerializer: Message with sender, reply preview and reactions
    MessagePreviewSerializer: Minimal message for chat list preview
    MessageCreateSerializer: Send new message (multipart for files)
    MessageListQuerySerializer: page/limit query parameters
    ReactionSerializer: Reaction toggle payload

Design Decisions:
    - Read and write serializers are separate for clarity
    - Soft-deleted message content is hidden; the row stays listed with
      is_deleted=true
    - Write serializers only shape input; business rules live in services
    - Stored public ids never leave the server
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.constants import MESSAGE_CONFIG
from chat.models import Chat, Message, MessageReaction


# =============================================================================
# Helper Functions
# =============================================================================


def public_descriptor(descriptor: dict | None) -> dict | None:
    """Attachment descriptor without the store's public_id."""
    if not descriptor:
        return None
    return {key: value for key, value in descriptor.items() if key != "public_id"}


# =============================================================================
# Message Serializers
# =============================================================================


class MessagePreviewSerializer(serializers.ModelSerializer):
    """
    Minimal message serializer for chat list preview.

    Used to show the latest message in chat lists.
    Handles soft-deleted message content hiding.
    """

    sender_name = serializers.SerializerMethodField(
        help_text="Display name of the message sender"
    )
    text = serializers.SerializerMethodField(
        help_text="Message text (empty if deleted or not a text message)"
    )

    class Meta:
        model = Message
        fields = [
            "id",
            "sender_name",
            "message_type",
            "text",
            "is_deleted",
            "created_at",
        ]
        read_only_fields = fields

    def get_sender_name(self, obj: Message) -> str | None:
        """Get sender's display name or None once the account is gone."""
        if obj.sender is None:
            return None
        return obj.sender.full_name

    def get_text(self, obj: Message) -> str:
        return "" if obj.is_deleted else obj.text


class ReplyPreviewSerializer(serializers.ModelSerializer):
    """Replied-to message: text and sender name only."""

    sender_name = serializers.SerializerMethodField()
    text = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ["id", "text", "sender_name"]
        read_only_fields = fields

    def get_sender_name(self, obj: Message) -> str | None:
        return obj.sender.full_name if obj.sender is not None else None

    def get_text(self, obj: Message) -> str:
        return "" if obj.is_deleted else obj.text


class MessageReactionSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = MessageReaction
        fields = ["user_id", "reaction_type", "created_at"]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message serializer for message lists.

    Includes sender details, reply preview and reactions. Content
    fields of deleted messages are blanked:
        text -> "", images -> [], attachment -> null
    """

    sender = UserSummarySerializer(read_only=True, allow_null=True)
    chat_id = serializers.IntegerField(read_only=True)
    text = serializers.SerializerMethodField(help_text="Body of text messages")
    images = serializers.SerializerMethodField(
        help_text="Image descriptors {url, name, size}"
    )
    attachment = serializers.SerializerMethodField(
        help_text="Video/audio/file descriptor {url, name, size}"
    )
    reply_to = ReplyPreviewSerializer(read_only=True, allow_null=True)
    reactions = MessageReactionSerializer(many=True, read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender",
            "message_type",
            "text",
            "images",
            "attachment",
            "reply_to",
            "reactions",
            "is_deleted",
            "deleted_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    # Rows keep the original content after deletion; only responses blank it.
    def get_text(self, obj: Message) -> str:
        return "" if obj.is_deleted else obj.text

    def get_images(self, obj: Message) -> list[dict]:
        if obj.is_deleted:
            return []
        return [public_descriptor(item) for item in obj.images or []]

    def get_attachment(self, obj: Message) -> dict | None:
        if obj.is_deleted:
            return None
        return public_descriptor(obj.attachment)


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    Supports:
    - Text messages (JSON or multipart)
    - Image/video/audio/file messages (multipart, repeated `files` parts)
    - Replies (reply_to)

    message_type and content are checked by MessageService so error
    messages stay consistent between API and service callers.
    """

    message_type = serializers.CharField(
        required=False,
        default="text",
        help_text="text, image, video, audio or file",
    )
    text = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=False,
        help_text="Body of text messages",
    )
    files = serializers.ListField(
        child=serializers.FileField(),
        required=False,
        default=list,
        help_text="Uploaded files for non-text messages",
    )
    reply_to = serializers.IntegerField(
        required=False,
        allow_null=True,
        default=None,
        help_text="Message ID being replied to (optional)",
    )


class MessageListQuerySerializer(serializers.Serializer):
    """Query parameters of the message list."""

    page = serializers.IntegerField(required=False, default=MESSAGE_CONFIG.DEFAULT_PAGE)
    limit = serializers.IntegerField(
        required=False, default=MESSAGE_CONFIG.DEFAULT_PAGE_SIZE
    )


class MessagePageSerializer(serializers.Serializer):
    """Response shape of the message list."""

    messages = MessageSerializer(many=True)
    current_page = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    total_messages = serializers.IntegerField()


class ReactionSerializer(serializers.Serializer):
    reaction_type = serializers.CharField(
        help_text="like, love, haha, wow, sad or angry",
    )


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatSerializer(serializers.ModelSerializer):
    """
    Read serializer for chats.

    Group-only fields are empty for private chats.
    """

    members = UserSummarySerializer(many=True, read_only=True)
    group_admin = UserSummarySerializer(read_only=True, allow_null=True)
    group_avatar = serializers.SerializerMethodField(
        help_text="Group avatar URL or empty string"
    )
    latest_message = MessagePreviewSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Chat
        fields = [
            "id",
            "is_group",
            "group_name",
            "group_admin",
            "group_avatar",
            "members",
            "latest_message",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_group_avatar(self, obj: Chat) -> str:
        return (obj.group_avatar or {}).get("url", "")


class ChatCreateSerializer(serializers.Serializer):
    """
    Serializer for creating chats.

    The requester is added to members by ChatService; member count rules
    are checked there.
    """

    members = serializers.ListField(
        child=serializers.IntegerField(),
        required=False,
        default=list,
        help_text="User IDs of the other members",
    )
    is_group = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Create a group (True) or private chat (False)",
    )
    group_name = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        default="",
        help_text="Group name; derived from member names when blank",
    )


class ChatUpdateSerializer(serializers.Serializer):
    """
    Serializer for patching a group chat.

    Only keys present in the request are forwarded to
    ChatService.update_chat().
    """

    members = serializers.ListField(
        child=serializers.IntegerField(),
        required=False,
        help_text="Replacement member IDs",
    )
    group_name = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        help_text="New group name",
    )
    group_admin = serializers.IntegerField(
        required=False,
        help_text="User ID of the new admin (admin only)",
    )
    group_avatar = serializers.FileField(
        required=False,
        help_text="New group avatar",
    )


class LeaveChatSerializer(serializers.Serializer):
    new_admin_id = serializers.IntegerField(
        required=False,
        allow_null=True,
        default=None,
        help_text="Member to appoint as admin (required when the admin leaves)",
    )
