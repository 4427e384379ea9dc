"""
URL configuration for the friends API.

Routes:
    /friends/                          - List friends (GET), send request (POST)
    /friends/pending/                  - Pending requests received (GET)
    /friends/{id}/                     - Remove friend (DELETE)
    /friends/requests/{id}/accept/     - Accept request (POST)
    /friends/requests/{id}/decline/    - Decline request (POST)

All URLs are prefixed with /api/v1/ in the main URL configuration.
"""

from rest_framework.routers import SimpleRouter

from friends.views import FriendRequestViewSet, FriendViewSet

router = SimpleRouter()
router.register(r"friends/requests", FriendRequestViewSet, basename="friend-request")
router.register(r"friends", FriendViewSet, basename="friend")

app_name = "friends"
urlpatterns = router.urls
