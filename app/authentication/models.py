"""
Authentication models.

This module defines the identity model:
- User: Custom user model with email-based authentication, display name,
  avatar descriptor, symmetric friend graph and presence timestamp

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService / UserService business logic
    - friends app: FriendRequest workflow mutating User.friends

Security:
    - User passwords hashed with Django's configured hasher
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        full_name: Display name shown in chats and used for group names
        avatar: Stored avatar descriptor {"url", "public_id"}; empty when unset
        friends: Symmetric friend graph (if A friends B, B friends A)
        last_seen: Updated on login and logout
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email="ada@example.com",
            password="secret1",
            full_name="Ada Lovelace",
        )
        user.friends.add(other)  # other.friends now contains user too
    """

    # Primary identifier (replaces username)
    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    full_name = models.CharField(
        max_length=150,
        help_text="Display name",
    )
    avatar = models.JSONField(
        default=dict,
        blank=True,
        help_text='Stored avatar descriptor: {"url": ..., "public_id": ...}',
    )
    friends = models.ManyToManyField(
        "self",
        symmetrical=True,
        blank=True,
        help_text="Accepted friends (symmetric)",
    )
    last_seen = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Last login or logout time",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """Return the display name, falling back to the email."""
        return self.full_name or self.email

    def get_short_name(self):
        """Return the last token of the display name."""
        parts = self.full_name.split()
        return parts[-1] if parts else self.email.split("@")[0]

    @property
    def avatar_url(self) -> str:
        """URL of the stored avatar, or empty string."""
        return (self.avatar or {}).get("url", "")

    def is_friend_of(self, other) -> bool:
        """Check whether a friend edge exists to `other` (user or id)."""
        other_id = getattr(other, "pk", other)
        return self.friends.filter(pk=other_id).exists()
