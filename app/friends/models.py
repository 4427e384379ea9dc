"""
Friend request model.

A request is a directed edge sender -> receiver that the receiver either
accepts or declines. Accepted friendships themselves live on User.friends.

State machine (django-fsm, status is protected):
    pending -> accepted
    pending -> declined

Both outcomes are terminal. Requests are never deleted through the API;
they go away with either user.
"""

from django.conf import settings
from django.db import models

from django_fsm import FSMField, transition

from core.models import BaseModel


class FriendRequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    DECLINED = "declined", "Declined"


class FriendRequest(BaseModel):
    """
    A friend request from sender to receiver.

    At most one pending request exists per ordered (sender, receiver)
    pair. FriendService checks this before inserting; there is no
    database constraint.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_friend_requests",
        help_text="User who sent the request",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_friend_requests",
        help_text="User who may accept or decline",
    )
    status = FSMField(
        max_length=10,
        choices=FriendRequestStatus.choices,
        default=FriendRequestStatus.PENDING,
        db_index=True,
        protected=True,
        help_text="pending until the receiver accepts or declines (managed by FSM)",
    )
    message = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Optional note from the sender",
    )

    class Meta:
        db_table = "friends_friend_request"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["receiver", "status"],
                name="friend_req_receiver_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"FriendRequest({self.sender_id} -> {self.receiver_id}, {self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == FriendRequestStatus.PENDING

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=status,
        source=FriendRequestStatus.PENDING,
        target=FriendRequestStatus.ACCEPTED,
    )
    def accept(self):
        """
        Transition: PENDING -> ACCEPTED

        The caller saves the request and adds the friendship.
        """

    @transition(
        field=status,
        source=FriendRequestStatus.PENDING,
        target=FriendRequestStatus.DECLINED,
    )
    def decline(self):
        """Transition: PENDING -> DECLINED"""
