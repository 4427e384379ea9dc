"""Django admin configuration for friend requests."""

from django.contrib import admin

from friends.models import FriendRequest


@admin.register(FriendRequest)
class FriendRequestAdmin(admin.ModelAdmin):
    """Admin interface for FriendRequest model."""

    list_display = ["id", "sender", "receiver", "status", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["sender__email", "receiver__email"]
    readonly_fields = ["status", "created_at", "updated_at"]
    raw_id_fields = ["sender", "receiver"]
    ordering = ["-created_at"]
