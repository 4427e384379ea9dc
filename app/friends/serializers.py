"""
Serializers for the friends API.

Read:
    FriendRequestSerializer: Request with sender/receiver summaries

Write:
    FriendRequestCreateSerializer: add_friend payload
"""

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from friends.models import FriendRequest


class FriendRequestSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    receiver = UserSummarySerializer(read_only=True)

    class Meta:
        model = FriendRequest
        fields = [
            "id",
            "sender",
            "receiver",
            "status",
            "message",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class FriendRequestCreateSerializer(serializers.Serializer):
    """
    Friend request payload.

    receiver_id is optional here so FriendService reports the
    "Receiver ID is required" message consistently.
    """

    receiver_id = serializers.IntegerField(
        required=False,
        allow_null=True,
        default=None,
        help_text="User to send the request to",
    )
    message = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        default="",
        help_text="Optional note to the receiver",
    )
