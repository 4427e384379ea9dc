"""
ViewSets for the friends API.

URL Structure:
    /api/v1/friends/                         GET, POST
    /api/v1/friends/pending/                 GET
    /api/v1/friends/{id}/                    DELETE
    /api/v1/friends/requests/{id}/accept/    POST
    /api/v1/friends/requests/{id}/decline/   POST

All operations go through FriendService; its errors are rendered by the
DRF exception handler.
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.serializers import UserSerializer
from friends.serializers import FriendRequestCreateSerializer, FriendRequestSerializer
from friends.services import FriendService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_friends",
        summary="List friends",
        tags=["Friends"],
        responses={200: UserSerializer(many=True)},
    ),
    create=extend_schema(
        operation_id="add_friend",
        summary="Send friend request",
        tags=["Friends"],
        request=FriendRequestCreateSerializer,
        responses={201: FriendRequestSerializer},
    ),
    destroy=extend_schema(
        operation_id="remove_friend",
        summary="Remove friend",
        tags=["Friends"],
        responses={200: None},
    ),
)
class FriendViewSet(viewsets.ViewSet):
    """
    ViewSet for the current user's friends.

    list:
        Friends of the current user.

    create:
        Send a friend request to receiver_id.

    destroy:
        Remove a friend; both users stop being friends.

    pending:
        Pending requests received by the current user, newest first.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):
        friends = FriendService.list_friends(request.user)
        return Response(UserSerializer(friends, many=True).data)

    def create(self, request):
        """
        Send a friend request.

        Request body:
            {"receiver_id": 42, "message": "Hi, it's Ada"}
        """
        serializer = FriendRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friend_request = FriendService.add_friend(
            request.user,
            serializer.validated_data["receiver_id"],
            message=serializer.validated_data["message"],
        )
        return Response(
            {
                "message": "Friend request sent successfully",
                "request": FriendRequestSerializer(friend_request).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, pk=None):
        FriendService.remove_friend(request.user, pk)
        return Response({"message": "Friend removed successfully"})

    @extend_schema(
        operation_id="list_pending_friend_requests",
        summary="Pending friend requests",
        tags=["Friends"],
        responses={200: FriendRequestSerializer(many=True)},
    )
    @action(detail=False, methods=["get"])
    def pending(self, request):
        requests = FriendService.list_pending_requests(request.user)
        return Response(FriendRequestSerializer(requests, many=True).data)


class FriendRequestViewSet(viewsets.ViewSet):
    """
    ViewSet for answering friend requests. Receiver only.

    accept:
        Accept the request; returns the private chat id of the pair.

    decline:
        Decline the request.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        operation_id="accept_friend_request",
        summary="Accept friend request",
        tags=["Friends"],
        request=None,
    )
    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):
        friend_request, chat = FriendService.accept_friend_request(request.user, pk)
        return Response(
            {
                "message": "Friend request accepted successfully",
                "chat_id": chat.id,
                "request": FriendRequestSerializer(friend_request).data,
            }
        )

    @extend_schema(
        operation_id="decline_friend_request",
        summary="Decline friend request",
        tags=["Friends"],
        request=None,
    )
    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):
        friend_request = FriendService.decline_friend_request(request.user, pk)
        return Response(
            {
                "message": "Friend request declined successfully",
                "request": FriendRequestSerializer(friend_request).data,
            }
        )
