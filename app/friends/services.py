"""
Friend request services.

This module provides:
- FriendService: request workflow and friend list management

Workflow:
    add_friend                 -> pending request
    accept_friend_request      -> accepted, users become friends, private chat
    decline_friend_request     -> declined
    remove_friend              -> friendship removed in both directions

Related files:
    - models.py: FriendRequest
    - authentication/models.py: User.friends (symmetric)
    - chat/services.py: ChatService.get_or_create_private_chat
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from django_fsm import TransitionNotAllowed

from authentication.models import User
from chat.services import ChatService
from core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from core.services import BaseService
from friends.models import FriendRequest, FriendRequestStatus

if TYPE_CHECKING:
    from chat.models import Chat


class FriendService(BaseService):
    """
    Friend request workflow.

    Usage:
        request = FriendService.add_friend(alice, bob.id, message="Hi!")
        request, chat = FriendService.accept_friend_request(bob, request.id)
        FriendService.remove_friend(alice, bob.id)
    """

    @classmethod
    def _get_request_for_receiver(cls, receiver: User, request_id) -> FriendRequest:
        """
        Load a request addressed to receiver, locked for update.

        Must run inside atomic().
        """
        friend_request = (
            FriendRequest.objects.select_for_update()
            .select_related("sender")
            .filter(pk=request_id)
            .first()
        )
        if friend_request is None:
            raise NotFoundError(
                "Friend request not found", details={"request_id": request_id}
            )
        if friend_request.receiver_id != receiver.pk:
            raise ForbiddenError("Unauthorized")
        return friend_request

    @staticmethod
    def _apply_transition(friend_request: FriendRequest, transition: Callable) -> None:
        """Run an FSM transition and persist the new status."""
        try:
            transition()
        except TransitionNotAllowed as e:
            raise ValidationError(
                "Friend request already handled",
                details={"status": friend_request.status},
            ) from e
        friend_request.save(update_fields=["status", "updated_at"])

    @classmethod
    def add_friend(
        cls, sender: User, receiver_id, message: str | None = None
    ) -> FriendRequest:
        """
        Send a friend request.

        Args:
            sender: Requesting user
            receiver_id: User to befriend
            message: Optional note

        Returns:
            The pending FriendRequest

        Raises:
            ValidationError: Missing receiver or self request
            NotFoundError: Receiver does not exist
            ConflictError: Already friends, or a pending request from
                sender to receiver exists
        """
        if receiver_id in (None, ""):
            raise ValidationError("Receiver ID is required")
        if str(receiver_id) == str(sender.pk):
            raise ValidationError("Cannot add yourself as a friend")

        receiver = User.objects.filter(pk=receiver_id).first()
        if receiver is None:
            raise NotFoundError("Friend not found", details={"receiver_id": receiver_id})

        if sender.is_friend_of(receiver):
            raise ConflictError("Already friends")

        if FriendRequest.objects.filter(
            sender=sender,
            receiver=receiver,
            status=FriendRequestStatus.PENDING,
        ).exists():
            raise ConflictError("Friend request already sent")

        friend_request = FriendRequest.objects.create(
            sender=sender,
            receiver=receiver,
            message=(message or "").strip(),
        )
        cls.get_logger().info(
            f"User {sender.id} sent friend request {friend_request.id} to {receiver.id}"
        )
        return friend_request

    @classmethod
    def accept_friend_request(
        cls, receiver: User, request_id
    ) -> tuple[FriendRequest, Chat]:
        """
        Accept a pending request addressed to receiver.

        The two users become friends (both directions) and get a private
        chat, reusing an existing one between them.

        Returns:
            (accepted request, private chat)

        Raises:
            NotFoundError: Request does not exist
            ForbiddenError: Requester is not the receiver
            ValidationError: Request already accepted or declined
        """
        with cls.atomic():
            friend_request = cls._get_request_for_receiver(receiver, request_id)

            cls._apply_transition(friend_request, friend_request.accept)

            receiver.friends.add(friend_request.sender)
            chat = ChatService.get_or_create_private_chat(
                receiver, friend_request.sender
            )

        cls.get_logger().info(
            f"User {receiver.id} accepted friend request {friend_request.id}, chat {chat.id}"
        )
        return friend_request, chat

    @classmethod
    def decline_friend_request(cls, receiver: User, request_id) -> FriendRequest:
        """
        Decline a pending request addressed to receiver.

        Raises:
            NotFoundError: Request does not exist
            ForbiddenError: Requester is not the receiver
            ValidationError: Request already accepted or declined
        """
        with cls.atomic():
            friend_request = cls._get_request_for_receiver(receiver, request_id)

            cls._apply_transition(friend_request, friend_request.decline)

        cls.get_logger().info(
            f"User {receiver.id} declined friend request {friend_request.id}"
        )
        return friend_request

    @classmethod
    def remove_friend(cls, user: User, friend_id) -> None:
        """
        Remove a friendship in both directions.

        Raises:
            NotFoundError: Friend user does not exist
            ValidationError: Users are not friends
        """
        with cls.atomic():
            friend = User.objects.filter(pk=friend_id).first()
            if friend is None:
                raise NotFoundError("Friend not found", details={"friend_id": friend_id})

            if not user.is_friend_of(friend):
                raise ValidationError("Not friends")

            user.friends.remove(friend)

        cls.get_logger().info(f"User {user.id} removed friend {friend.id}")

    @classmethod
    def list_friends(cls, user: User) -> list[User]:
        return list(user.friends.order_by("full_name", "id"))

    @classmethod
    def list_pending_requests(cls, user: User) -> list[FriendRequest]:
        """Pending requests received by user, newest first."""
        return list(
            FriendRequest.objects.filter(
                receiver=user, status=FriendRequestStatus.PENDING
            )
            .select_related("sender")
            .order_by("-created_at", "-id")
        )
