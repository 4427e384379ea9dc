"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/signup/       - Create account (POST)
    /api/v1/auth/login/        - Log in (POST)
    /api/v1/auth/logout/       - Log out (POST)
    /api/v1/auth/check/        - Current user (GET)
    /api/v1/users/profile/     - Profile (GET/PUT/DELETE)
    /api/v1/users/search/      - Search users (GET ?query=)
    /api/v1/users/{id}/        - User detail (GET)
"""

from django.urls import path

from authentication.views import (
    CheckAuthView,
    LoginView,
    LogoutView,
    ProfileView,
    SignupView,
    UserDetailView,
    UserSearchView,
)

app_name = "authentication"

urlpatterns = [
    # Session
    path("auth/signup/", SignupView.as_view(), name="signup"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/check/", CheckAuthView.as_view(), name="check"),
    # Profile and lookups
    path("users/profile/", ProfileView.as_view(), name="profile"),
    path("users/search/", UserSearchView.as_view(), name="user-search"),
    path("users/<int:user_id>/", UserDetailView.as_view(), name="user-detail"),
]
