"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat management
- Message moderation
- Reaction viewing
"""

from django.contrib import admin

from chat.models import Chat, Message, MessageReaction


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = [
        "id",
        "is_group",
        "group_name",
        "group_admin",
        "created_at",
        "updated_at",
    ]
    list_filter = ["is_group", "created_at"]
    search_fields = ["group_name", "id"]
    readonly_fields = ["created_at", "updated_at", "latest_message"]
    raw_id_fields = ["group_admin"]
    filter_horizontal = ["members"]
    ordering = ["-updated_at"]


class MessageReactionInline(admin.TabularInline):
    """Inline display of reactions in message admin."""

    model = MessageReaction
    extra = 0
    readonly_fields = ["created_at"]
    raw_id_fields = ["user"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "chat_id",
        "sender",
        "message_type",
        "text_preview",
        "is_deleted",
        "created_at",
    ]
    list_filter = ["message_type", "is_deleted", "created_at"]
    search_fields = ["text", "sender__email"]
    readonly_fields = ["created_at", "updated_at", "deleted_at"]
    raw_id_fields = ["chat", "sender", "reply_to"]
    inlines = [MessageReactionInline]
    ordering = ["-created_at"]

    @admin.display(description="Text")
    def text_preview(self, obj: Message) -> str:
        """Show truncated message text."""
        if len(obj.text) > 50:
            return obj.text[:50] + "..."
        return obj.text


@admin.register(MessageReaction)
class MessageReactionAdmin(admin.ModelAdmin):
    list_display = ["id", "message", "user", "reaction_type", "created_at"]
    list_filter = ["reaction_type"]
    raw_id_fields = ["message", "user"]
