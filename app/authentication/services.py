"""
Authentication services.

This module provides:
- AuthService: signup, login, logout
- UserService: profile management, user search and identity lookup

Related files:
    - models.py: User
    - authentication.py: token issuance and cookie helpers (used by views)
    - core/attachments.py: avatar storage

Security:
    - Passwords hashed with Django's configured hasher
    - Login failures report one generic message for unknown email and
      wrong password alike
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db.models import Q
from django.utils import timezone

from authentication.models import User
from core.attachments import get_attachment_store
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.services import BaseService

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.core.files import File


MIN_PASSWORD_LENGTH = 6
SEARCH_RESULT_LIMIT = 50
AVATAR_FOLDER = "avatars"


def _normalize_email(email: str) -> str:
    """Validate an email address and return it stripped."""
    email = (email or "").strip()
    try:
        validate_email(email)
    except DjangoValidationError as exc:
        raise ValidationError("Invalid email format") from exc
    return email


def _email_taken(email: str, exclude_user_id=None) -> bool:
    queryset = User.objects.filter(email__iexact=email)
    if exclude_user_id is not None:
        queryset = queryset.exclude(pk=exclude_user_id)
    return queryset.exists()


class AuthService(BaseService):
    """
    Account creation and session bookkeeping.

    Token issuance and cookies are HTTP concerns and live in the views;
    these methods only validate credentials and touch the user record.

    Usage:
        user = AuthService.signup("Ada Lovelace", "ada@example.com", "secret1")
        user = AuthService.login("ada@example.com", "secret1")
        AuthService.logout(user)
    """

    @classmethod
    def signup(cls, full_name: str, email: str, password: str) -> User:
        """
        Register a new user.

        Args:
            full_name: Display name
            email: Login email, must be unique (case-insensitive)
            password: Raw password, at least 6 characters

        Returns:
            The created User

        Raises:
            ValidationError: Missing fields, short password, bad email
            ConflictError: Email already registered
        """
        full_name = (full_name or "").strip()
        if not full_name or not email or not password:
            raise ValidationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        email = _normalize_email(email)
        if _email_taken(email):
            raise ConflictError("Email already exists")

        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=full_name,
            last_seen=timezone.now(),
        )
        cls.get_logger().info(f"User {user.id} signed up")
        return user

    @classmethod
    def login(cls, email: str, password: str) -> User:
        """
        Check credentials and mark the user as seen.

        Raises:
            ValidationError: Missing fields or invalid credentials
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = User.objects.filter(email__iexact=email.strip()).first()
        if user is None or not user.is_active or not user.check_password(password):
            raise ValidationError("Invalid credentials")

        user.last_seen = timezone.now()
        user.save(update_fields=["last_seen", "updated_at"])
        cls.get_logger().info(f"User {user.id} logged in")
        return user

    @classmethod
    def logout(cls, user: User) -> None:
        """Record the logout time as the user's last_seen."""
        user.last_seen = timezone.now()
        user.save(update_fields=["last_seen", "updated_at"])
        cls.get_logger().info(f"User {user.id} logged out")


class UserService(BaseService):
    """
    Profile management and identity lookups.

    Methods:
        update_profile: Change name, email and/or avatar
        delete_profile: Remove the account and its stored avatar
        search_users: Substring search on name or email
        get_user: Single user by id
        find_users_by_ids: Bulk lookup preserving input order
    """

    @classmethod
    def update_profile(
        cls,
        user: User,
        *,
        full_name: str | None = None,
        email: str | None = None,
        avatar: File | None = None,
    ) -> User:
        """
        Update the provided profile fields only.

        A new avatar replaces the stored one: the previous file is destroyed
        first, then the new file is uploaded to the "avatars" folder.

        Raises:
            ValidationError: Blank name or invalid email
            ConflictError: Email used by another account
            ExternalServiceError: Attachment store failure
        """
        update_fields = ["updated_at"]

        if full_name is not None:
            full_name = full_name.strip()
            if not full_name:
                raise ValidationError("Full name cannot be empty")
            user.full_name = full_name
            update_fields.append("full_name")

        if email is not None:
            email = _normalize_email(email)
            if _email_taken(email, exclude_user_id=user.pk):
                raise ConflictError("Email already exists")
            user.email = email
            update_fields.append("email")

        if avatar is not None:
            store = get_attachment_store()
            if user.avatar.get("public_id"):
                store.destroy(user.avatar["public_id"])
            result = store.upload(avatar, folder=AVATAR_FOLDER)
            user.avatar = {"url": result.url, "public_id": result.public_id}
            update_fields.append("avatar")

        user.save(update_fields=update_fields)
        cls.get_logger().info(
            f"Updated profile for user {user.id}: {', '.join(update_fields[1:])}"
        )
        return user

    @classmethod
    def delete_profile(cls, user: User) -> None:
        """
        Delete the account.

        Friend edges, memberships and friend requests go with the row;
        the user's messages stay with their sender cleared.
        """
        if user.avatar.get("public_id"):
            get_attachment_store().destroy(user.avatar["public_id"])

        user_id = user.id
        user.delete()
        cls.get_logger().info(f"Deleted user {user_id}")

    @classmethod
    def search_users(cls, user: User, query: str) -> list[User]:
        """
        Case-insensitive substring search on full name or email.

        The requesting user is never part of the results. A blank query
        returns an empty list rather than everyone.
        """
        query = (query or "").strip()
        if not query:
            return []

        return list(
            User.objects.filter(
                Q(full_name__icontains=query) | Q(email__icontains=query),
                is_active=True,
            )
            .exclude(pk=user.pk)
            .order_by("full_name", "id")[:SEARCH_RESULT_LIMIT]
        )

    @classmethod
    def get_user(cls, user_id) -> User:
        """
        Raises:
            NotFoundError: No such user
        """
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise NotFoundError("User not found", details={"user_id": user_id})
        return user

    @classmethod
    def find_users_by_ids(cls, user_ids: Iterable) -> list[User]:
        """
        Resolve ids to users in the order given; unknown ids are skipped.

        Duplicate ids resolve once, at their first position.
        """
        ordered_ids = list(dict.fromkeys(user_ids))
        users_by_id = User.objects.in_bulk(ordered_ids)
        return [users_by_id[pk] for pk in ordered_ids if pk in users_by_id]
