"""
Chat application configuration.

This app provides the chat system with:
- Private (two member) and group chats
- A single admin per group
- Typed messages with attachments, replies and reactions
- Soft deletion of messages
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
