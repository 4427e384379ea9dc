"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures (alice, bob, carol, outsider)
- Chat fixtures (private and group)
- Message fixtures
- API client helpers for authenticated requests

Usage:
    def test_example(group_chat, alice_client):
        response = alice_client.get(f'/api/v1/chats/{group_chat.id}/')
        assert response.status_code == 200
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import GroupChatFactory, MessageFactory, PrivateChatFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    """Group admin in the group_chat fixture."""
    return UserFactory(full_name="Alice Anderson")


@pytest.fixture
def bob(db):
    return UserFactory(full_name="Bob Brown")


@pytest.fixture
def carol(db):
    return UserFactory(full_name="Carol Clark")


@pytest.fixture
def outsider(db):
    """User who is not a member of any fixture chat."""
    return UserFactory(full_name="Oscar Outsider")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def group_chat(alice, bob, carol):
    """Group of alice (admin), bob and carol."""
    return GroupChatFactory(
        group_name="Weekend plans",
        group_admin=alice,
        members=[alice, bob, carol],
    )


@pytest.fixture
def private_chat(alice, bob):
    """Private chat between alice and bob."""
    return PrivateChatFactory(members=[alice, bob])


@pytest.fixture
def group_message(group_chat, bob):
    """Text message from bob in the group chat."""
    return MessageFactory(chat=group_chat, sender=bob, text="Hi all")


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def upload():
    """Factory for small uploaded files."""

    def _make(name="photo.png", content=b"fake-bytes"):
        return SimpleUploadedFile(name, content)

    return _make


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/chats/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def alice_client(authenticated_client_factory, alice):
    """API client authenticated as alice."""
    return authenticated_client_factory(alice)


@pytest.fixture
def bob_client(authenticated_client_factory, bob):
    """API client authenticated as bob."""
    return authenticated_client_factory(bob)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider):
    """API client authenticated as a non-member."""
    return authenticated_client_factory(outsider)
