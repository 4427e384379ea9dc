"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChatViewSet: Chat CRUD, leave, and the chat's messages
- MessageViewSet: Operations on a single message

URL Structure:
    /api/v1/chats/                     GET, POST
    /api/v1/chats/{id}/                GET, PUT, PATCH, DELETE
    /api/v1/chats/{id}/leave/          PUT
    /api/v1/chats/{id}/messages/       GET, POST
    /api/v1/messages/{id}/             PATCH, DELETE (soft delete)
    /api/v1/messages/{id}/react/       PATCH

Design Decisions:
    - Plain ViewSets; every operation goes through the service layer
    - Membership, admin and ownership checks live in the services, which
      raise core.exceptions errors rendered by the DRF exception handler
    - PUT and PATCH on a chat are both partial updates
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    ChatUpdateSerializer,
    LeaveChatSerializer,
    MessageCreateSerializer,
    MessageListQuerySerializer,
    MessagePageSerializer,
    MessageReactionSerializer,
    MessageSerializer,
    ReactionSerializer,
)
from chat.services import ChatService, MessageService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chats",
        summary="List chats",
        tags=["Chat - Chats"],
        responses={200: ChatSerializer(many=True)},
    ),
    create=extend_schema(
        operation_id="create_chat",
        summary="Create chat",
        tags=["Chat - Chats"],
        request=ChatCreateSerializer,
        responses={201: ChatSerializer},
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat",
        tags=["Chat - Chats"],
        responses={200: ChatSerializer},
    ),
    update=extend_schema(
        operation_id="replace_chat",
        summary="Update group chat",
        tags=["Chat - Chats"],
        request=ChatUpdateSerializer,
        responses={200: ChatSerializer},
    ),
    partial_update=extend_schema(
        operation_id="update_chat",
        summary="Update group chat",
        tags=["Chat - Chats"],
        request=ChatUpdateSerializer,
        responses={200: ChatSerializer},
    ),
    destroy=extend_schema(
        operation_id="delete_chat",
        summary="Delete group chat",
        tags=["Chat - Chats"],
        responses={200: None},
    ),
)
class ChatViewSet(viewsets.ViewSet):
    """
    ViewSet for chat operations.

    list:
        Get all chats of the current user, most recent activity first.

    create:
        Create a private chat (exactly one other member) or a group chat
        (at least two other members). The creator of a group is its admin.

    retrieve:
        Get chat details including members. Members only.

    update / partial_update:
        Patch group name, members, admin (admin only) or avatar.
        Private chats cannot be updated.

    destroy:
        Delete a group chat and soft delete its messages. Admin only.

    leave:
        Leave a group chat. An admin must appoint a successor while other
        members remain; the last member leaving deletes the group.

    messages:
        GET pages through messages newest first; POST sends a message.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_value_regex = r"\d+"

    def list(self, request):
        """List the current user's chats."""
        chats = ChatService.list_chats(request.user)
        return Response(ChatSerializer(chats, many=True).data)

    def create(self, request):
        """Create a private or group chat."""
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.create_chat(request.user, **serializer.validated_data)
        return Response(ChatSerializer(chat).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        chat = ChatService.get_chat(request.user, pk)
        return Response(ChatSerializer(chat).data)

    def update(self, request, pk=None):
        """
        Patch a group chat.

        Request body (JSON, or multipart when sending group_avatar):
            {
                "group_name": "Weekend plans",   // Optional
                "members": [1, 2, 3],            // Optional, replaces members
                "group_admin": 2,                // Optional, admin only
                "group_avatar": <file>           // Optional
            }
        """
        serializer = ChatUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        chat = ChatService.update_chat(
            request.user,
            pk,
            members=data.get("members"),
            group_name=data.get("group_name"),
            group_admin_id=data.get("group_admin"),
            group_avatar=data.get("group_avatar"),
        )
        return Response(ChatSerializer(chat).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        """Delete a group chat."""
        ChatService.delete_chat(request.user, pk)
        return Response({"message": "Chat deleted successfully"})

    @extend_schema(
        operation_id="leave_chat",
        summary="Leave group chat",
        tags=["Chat - Chats"],
        request=LeaveChatSerializer,
        responses={
            200: OpenApiResponse(
                response=ChatSerializer,
                description="Updated chat, or a message when the group was deleted",
            ),
        },
    )
    @action(detail=True, methods=["put"])
    def leave(self, request, pk=None):
        """Leave a group chat."""
        serializer = LeaveChatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.leave_chat(
            request.user,
            pk,
            new_admin_id=serializer.validated_data["new_admin_id"],
        )

        if result.deleted:
            return Response(
                {"message": "Group deleted as no members left", "deleted": True}
            )
        return Response(ChatSerializer(result.chat).data)

    @extend_schema(
        methods=["GET"],
        operation_id="list_messages",
        summary="List messages",
        tags=["Chat - Messages"],
        parameters=[
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: MessagePageSerializer},
    )
    @extend_schema(
        methods=["POST"],
        operation_id="send_message",
        summary="Send message",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        """List (GET) or send (POST) messages of a chat."""
        if request.method == "POST":
            return self._send_message(request, pk)

        query = MessageListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        page = MessageService.list_messages(request.user, pk, **query.validated_data)
        return Response(
            {
                "messages": MessageSerializer(page.messages, many=True).data,
                "current_page": page.current_page,
                "total_pages": page.total_pages,
                "total_messages": page.total_messages,
            }
        )

    def _send_message(self, request, pk):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        message = MessageService.send_message(
            request.user,
            pk,
            data["message_type"],
            text=data["text"],
            files=data["files"],
            reply_to_id=data["reply_to"],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    partial_update=extend_schema(
        operation_id="delete_message_patch",
        summary="Delete message",
        tags=["Chat - Messages"],
        request=None,
        responses={200: None},
    ),
    destroy=extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        tags=["Chat - Messages"],
        responses={200: None},
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for single-message operations.

    partial_update / destroy:
        Soft delete a message. Users can only delete their own messages.
        The message stays listed with is_deleted=true.

    react:
        Toggle a reaction: add, replace with another type, or remove
        when the same type is sent again.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def partial_update(self, request, pk=None):
        return self.destroy(request, pk=pk)

    def destroy(self, request, pk=None):
        """Soft delete a message."""
        MessageService.delete_message(request.user, pk)
        return Response({"message": "Message deleted successfully"})

    @extend_schema(
        operation_id="react_to_message",
        summary="React to message",
        tags=["Chat - Messages"],
        request=ReactionSerializer,
        responses={200: MessageReactionSerializer},
    )
    @action(detail=True, methods=["patch"])
    def react(self, request, pk=None):
        """Toggle the current user's reaction on a message."""
        serializer = ReactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reaction = MessageService.react_to_message(
            request.user, pk, serializer.validated_data["reaction_type"]
        )
        return Response(
            {
                "message": "Message reacted successfully",
                "reaction": (
                    MessageReactionSerializer(reaction).data if reaction else None
                ),
            }
        )
