"""
URL configuration for chat API.

URL Structure:
    Chats:
        /chats/                     GET, POST
        /chats/{id}/                GET, PUT, PATCH, DELETE
        /chats/{id}/leave/          PUT
        /chats/{id}/messages/       GET, POST

    Messages:
        /messages/{id}/             PATCH, DELETE
        /messages/{id}/react/       PATCH

All URLs are prefixed with /api/v1/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from chat.views import ChatViewSet, MessageViewSet

router = SimpleRouter()
router.register(r"chats", ChatViewSet, basename="chat")
router.register(r"messages", MessageViewSet, basename="message")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
