"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Session endpoints
        signup/                    - Create account, set jwt cookie
        login/                     - Email/password login, set jwt cookie
        logout/                    - Clear jwt cookie
        check/                     - Current user
    /api/v1/users/                 - User endpoints
        profile/                   - Profile get/update/delete
        search/                    - Search users by name or email
        {id}/                      - User detail
    /api/v1/chats/                 - Chat list/create
        {id}/                      - Chat detail/update/delete
        {id}/leave/                - Leave group chat
        {id}/messages/             - Message list/send
    /api/v1/messages/{id}/         - Message soft delete
        react/                     - Toggle reaction
    /api/v1/friends/               - Friend list / send request
        pending/                   - Pending requests received
        {id}/                      - Remove friend
        requests/{id}/accept/      - Accept request
        requests/{id}/decline/     - Decline request

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication and users
    path("", include("authentication.urls")),
    # Chats and messages
    path("", include("chat.urls")),
    # Friends
    path("", include("friends.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Chat Admin"
admin.site.site_title = "Chat Admin Portal"
admin.site.index_title = "Welcome to the Chat Admin Portal"
