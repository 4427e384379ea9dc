"""
Test configuration and fixtures for friends tests.

This module provides:
- User fixtures (ada, alan)
- A pending request from ada to alan
- API client helpers for authenticated requests
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from friends.tests.factories import FriendRequestFactory


@pytest.fixture
def ada(db):
    return UserFactory(full_name="Ada Lovelace")


@pytest.fixture
def alan(db):
    return UserFactory(full_name="Alan Turing")


@pytest.fixture
def pending_request(ada, alan):
    """Pending request sent by ada to alan."""
    return FriendRequestFactory(sender=ada, receiver=alan, message="Hello!")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, ada):
            client = authenticated_client_factory(ada)
            response = client.get('/api/v1/friends/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def ada_client(authenticated_client_factory, ada):
    return authenticated_client_factory(ada)


@pytest.fixture
def alan_client(authenticated_client_factory, alan):
    return authenticated_client_factory(alan)
