"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable user fixtures
- API client helpers for authenticated requests
- Uploaded file helpers

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/users/profile/')
        assert response.status_code == 200
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active user."""
    return UserFactory(full_name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def other_user(db):
    """Create a second user for lookups and conflicts."""
    return UserFactory(full_name="Alan Turing", email="alan@example.com")


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!", full_name="Admin"
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """
    API client authenticated as the default user via Bearer token.
    """
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def avatar_file():
    """Small uploaded file standing in for an avatar image."""
    return SimpleUploadedFile("avatar.png", b"\x89PNG fake image", content_type="image/png")


@pytest.fixture
def valid_signup_data():
    return {
        "full_name": "Grace Hopper",
        "email": "grace@example.com",
        "password": "cobol59",
    }
