"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations, full and summary forms)
- Signup / login request payloads
- Profile update payload (multipart avatar upload)

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AuthService / UserService perform the actual work

Security:
    - Password fields are write-only
    - Stored avatar public ids never leave the server
"""

from rest_framework import serializers

from authentication.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """
    Minimal identity for embedding in chats and messages.

    Exposes only display data: id, name and avatar URL.
    """

    avatar = serializers.CharField(source="avatar_url", read_only=True)

    class Meta:
        model = User
        fields = ["id", "full_name", "avatar"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used for the current user (signup/login/check/profile) and for
    user lookups.
    """

    avatar = serializers.CharField(source="avatar_url", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "avatar",
            "last_seen",
            "date_joined",
        ]
        read_only_fields = fields


class SignupSerializer(serializers.Serializer):
    """
    Signup request payload.

    Fields are optional here so AuthService reports the
    "All fields are required" message consistently.
    """

    full_name = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", write_only=True
    )


class LoginSerializer(serializers.Serializer):
    """Login request payload."""

    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", write_only=True
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Profile update payload.

    Only keys present in the request are forwarded to
    UserService.update_profile().
    """

    full_name = serializers.CharField(required=False, allow_blank=True)
    email = serializers.CharField(required=False)
    avatar = serializers.FileField(required=False)
