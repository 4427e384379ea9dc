"""
Tests for authentication and user API views.

Endpoints:
    POST   /api/v1/auth/signup/
    POST   /api/v1/auth/login/
    POST   /api/v1/auth/logout/
    GET    /api/v1/auth/check/
    GET/PUT/DELETE /api/v1/users/profile/
    GET    /api/v1/users/search/?query=
    GET    /api/v1/users/{id}/

Error bodies carry a "message" field rendered by the DRF exception handler.
"""

import pytest
from django.urls import reverse
from rest_framework import status

from authentication.models import User

SIGNUP_URL = "/api/v1/auth/signup/"
LOGIN_URL = "/api/v1/auth/login/"
LOGOUT_URL = "/api/v1/auth/logout/"
CHECK_URL = "/api/v1/auth/check/"
PROFILE_URL = "/api/v1/users/profile/"
SEARCH_URL = "/api/v1/users/search/"


def user_detail_url(user_id):
    return reverse("authentication:user-detail", kwargs={"user_id": user_id})


# =============================================================================
# Session Views
# =============================================================================


@pytest.mark.django_db
class TestSignupView:
    """
    Tests for SignupView.

    POST /api/v1/auth/signup/
    """

    def test_signup_creates_user_and_sets_cookie(self, api_client, valid_signup_data):
        """
        Successful signup returns 201, the user, and the jwt cookie.

        Why it matters: Browser clients are logged in straight after signup.
        """
        response = api_client.post(SIGNUP_URL, valid_signup_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["email"] == "grace@example.com"
        assert "password" not in response.data

        cookie = response.cookies["jwt"]
        assert cookie.value
        assert cookie["httponly"]
        assert cookie["samesite"] == "Strict"

    def test_cookie_authenticates_following_requests(self, api_client, valid_signup_data):
        api_client.post(SIGNUP_URL, valid_signup_data, format="json")

        response = api_client.get(CHECK_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["full_name"] == "Grace Hopper"

    def test_missing_fields_return_400_with_message(self, api_client):
        response = api_client.post(SIGNUP_URL, {"email": "x@example.com"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "All fields are required"
        assert response.data["error_code"] == "VALIDATION_ERROR"

    def test_duplicate_email_returns_400(self, api_client, user, valid_signup_data):
        valid_signup_data["email"] = user.email

        response = api_client.post(SIGNUP_URL, valid_signup_data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "Email already exists"
        assert response.data["error_code"] == "CONFLICT"


@pytest.mark.django_db
class TestLoginLogoutViews:
    """
    Tests for LoginView, LogoutView and CheckAuthView.
    """

    def test_login_sets_cookie(self, api_client, user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "ada@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.cookies["jwt"].value

    def test_login_invalid_credentials(self, api_client, user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "ada@example.com", "password": "nope-nope"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "Invalid credentials"

    def test_logout_clears_cookie(self, authenticated_client, user):
        response = authenticated_client.post(LOGOUT_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Logged out successfully"
        assert response.cookies["jwt"].value == ""
        user.refresh_from_db()
        assert user.last_seen is not None

    def test_check_requires_authentication(self, api_client):
        response = api_client.get(CHECK_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "message" in response.data

    def test_check_with_bearer_header(self, authenticated_client, user):
        response = authenticated_client.get(CHECK_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == user.email


# =============================================================================
# Profile & User Views
# =============================================================================


@pytest.mark.django_db
class TestProfileView:
    """
    Tests for ProfileView.

    GET/PUT/DELETE /api/v1/users/profile/
    """

    def test_get_profile(self, authenticated_client, user):
        response = authenticated_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["full_name"] == "Ada Lovelace"
        assert response.data["avatar"] == ""

    def test_put_updates_name(self, authenticated_client, user):
        response = authenticated_client.put(
            PROFILE_URL, {"full_name": "Ada King"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["full_name"] == "Ada King"

    def test_put_multipart_avatar(self, authenticated_client, user, avatar_file):
        response = authenticated_client.put(
            PROFILE_URL, {"avatar": avatar_file}, format="multipart"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["avatar"].startswith("https://files.test/avatars/")

    def test_delete_profile(self, authenticated_client, user):
        response = authenticated_client.delete(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Profile deleted successfully"
        assert not User.objects.filter(pk=user.pk).exists()


@pytest.mark.django_db
class TestUserLookupViews:
    """
    Tests for UserSearchView and UserDetailView.
    """

    def test_search(self, authenticated_client, other_user):
        response = authenticated_client.get(SEARCH_URL, {"query": "alan"})

        assert response.status_code == status.HTTP_200_OK
        assert [u["id"] for u in response.data] == [other_user.id]

    def test_user_detail(self, authenticated_client, other_user):
        response = authenticated_client.get(user_detail_url(other_user.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["full_name"] == "Alan Turing"

    def test_unknown_user_returns_404(self, authenticated_client):
        response = authenticated_client.get(user_detail_url(999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "User not found"
