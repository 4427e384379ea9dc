"""
Tests for the authentication User model and manager.

Covers:
- UserManager.create_user / create_superuser
- Symmetric friend edges
- Display helpers (get_full_name, get_short_name, avatar_url)
"""

import pytest

from authentication.models import User
from authentication.tests.factories import UserFactory


# =============================================================================
# UserManager
# =============================================================================


@pytest.mark.django_db
class TestUserManager:
    """
    Verifies:
    - Emails are normalized and passwords hashed
    - Superusers get staff and superuser flags
    """

    def test_create_user_hashes_password(self):
        user = User.objects.create_user(
            email="ada@EXAMPLE.com", password="secret1", full_name="Ada Lovelace"
        )

        assert user.email == "ada@example.com"
        assert user.password != "secret1"
        assert user.check_password("secret1")

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="secret1")

    def test_create_superuser_sets_flags(self):
        admin = User.objects.create_superuser(
            email="root@example.com", password="secret1", full_name="Root"
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True


# =============================================================================
# User
# =============================================================================


@pytest.mark.django_db
class TestUserModel:
    """
    Verifies:
    - Friendship is symmetric
    - Display helpers fall back sensibly
    """

    def test_friend_edge_is_symmetric(self):
        """
        Adding a friend on one side makes both users friends.

        Why it matters: Friend lists and "Already friends" checks read
        either side of the relation.
        """
        ada = UserFactory()
        alan = UserFactory()

        ada.friends.add(alan)

        assert alan.is_friend_of(ada)
        assert ada.is_friend_of(alan.pk)
        assert list(alan.friends.all()) == [ada]

    def test_str_is_email(self):
        user = UserFactory(email="grace@example.com")

        assert str(user) == "grace@example.com"

    def test_short_name_is_last_name_token(self):
        user = UserFactory(full_name="Grace Brewster Hopper")

        assert user.get_short_name() == "Hopper"
        assert user.get_full_name() == "Grace Brewster Hopper"

    def test_avatar_url_empty_without_avatar(self):
        user = UserFactory()

        assert user.avatar == {}
        assert user.avatar_url == ""

    def test_avatar_url_from_descriptor(self):
        user = UserFactory(avatar={"url": "https://files.test/a.png", "public_id": "a"})

        assert user.avatar_url == "https://files.test/a.png"
