"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on chats, memberships and messages.

Services:
    ChatService: Chat lifecycle (list, create, get, update, delete, leave)
    MessageService: Message operations (send, list, delete, react)

Design Principles:
    - Services are stateless (use class methods)
    - Failures raise core.exceptions errors; nothing is mutated before
      validation passes
    - Multi-row mutations run inside BaseService.atomic() with the chat row
      locked via select_for_update()
    - Membership is handled as sets of user ids

Usage:
    from chat.services import ChatService, MessageService

    # Create a group chat; the creator becomes admin
    chat = ChatService.create_chat(user, members=[bob.id, carol.id], is_group=True)

    # Send a message
    message = MessageService.send_message(user, chat.id, "text", text="Hello!")

    # Leave, handing admin to bob
    result = ChatService.leave_chat(user, chat.id, new_admin_id=bob.id)
"""

from __future__ import annotations

import math
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings

from authentication.services import UserService
from chat.constants import ATTACHMENT_CONFIG, CHAT_CONFIG, MESSAGE_CONFIG
from chat.models import Chat, Message, MessageReaction, MessageType, ReactionType
from chat.payloads import build_payload, validate_content
from core.attachments import get_attachment_store
from core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from core.services import BaseService

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from django.core.files import File

    from authentication.models import User


# =============================================================================
# Group Naming
# =============================================================================


def derive_group_name(
    full_names: Sequence[str],
    max_length: int = CHAT_CONFIG.GROUP_NAME_MAX_LENGTH,
) -> str:
    """
    Build a default group name from member names.

    Takes the last word of each name, in order, and joins them with ", ".
    When the names do not all fit, as many as fit are kept and a
    " +N more" suffix counts the rest. The result never exceeds max_length.

    Examples:
        ["Ada Lovelace", "Alan Turing"] -> "Lovelace, Turing"
        many long names                 -> "Lovelace, Turing +3 more"
    """
    separator = CHAT_CONFIG.GROUP_NAME_SEPARATOR
    tokens = [name.split()[-1] for name in full_names if name and name.split()]
    if not tokens:
        return CHAT_CONFIG.GROUP_NAME_FALLBACK

    joined = separator.join(tokens)
    if len(joined) <= max_length:
        return joined

    included: list[str] = []
    for token in tokens:
        candidate = separator.join([*included, token])
        if len(candidate) > max_length:
            break
        included.append(token)

    while included:
        remaining = len(tokens) - len(included)
        name = f"{separator.join(included)} +{remaining} more"
        if len(name) <= max_length:
            return name
        included.pop()

    if len(tokens) == 1:
        return tokens[0][:max_length]

    suffix = f" +{len(tokens) - 1} more"
    head = tokens[0][: max(max_length - len(suffix), 0)]
    return f"{head}{suffix}" if head else tokens[0][:max_length]


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class LeaveResult:
    """
    Outcome of leaving a group.

    Attributes:
        chat: The updated chat, or None when the group was deleted
        deleted: True when the last member left and the group was removed
    """

    chat: Chat | None
    deleted: bool


@dataclass(frozen=True)
class MessagePage:
    """One page of a chat's messages, newest first."""

    messages: list[Message]
    current_page: int
    total_pages: int
    total_messages: int


# =============================================================================
# Chat Service
# =============================================================================


class ChatService(BaseService):
    """
    Service for chat lifecycle operations.

    Methods:
        list_chats: Chats of a user, most recent activity first
        create_chat: Create a private or group chat
        get_chat: Single chat for a member
        update_chat: Patch group name, members, admin or avatar
        delete_chat: Delete a group (admin only)
        leave_chat: Leave a group, deleting it when nobody remains
        find_private_chat: Private chat between exactly two users
        get_or_create_private_chat: Reuse or provision a private chat
    """

    @staticmethod
    def _chat_queryset():
        return Chat.objects.select_related(
            "group_admin",
            "latest_message",
            "latest_message__sender",
        ).prefetch_related("members")

    @classmethod
    def _get_chat(cls, chat_id, *, lock: bool = False) -> Chat:
        queryset = Chat.objects.select_for_update() if lock else cls._chat_queryset()
        chat = queryset.filter(pk=chat_id).first()
        if chat is None:
            raise NotFoundError("Chat not found", details={"chat_id": chat_id})
        return chat

    @classmethod
    def _get_member_chat(cls, user: User, chat_id) -> Chat:
        chat = cls._get_chat(chat_id)
        if not chat.has_member(user):
            raise ForbiddenError("Unauthorized")
        return chat

    @staticmethod
    def _resolve_users(user_ids: Sequence) -> list[User]:
        users = UserService.find_users_by_ids(user_ids)
        if len(users) != len(user_ids):
            missing = set(user_ids) - {u.pk for u in users}
            raise NotFoundError(
                "User not found",
                details={"user_ids": sorted(missing, key=str)},
            )
        return users

    @classmethod
    def _destroy_group(cls, chat: Chat) -> None:
        """Remove a group: stored avatar, messages (soft) and the chat row."""
        public_id = (chat.group_avatar or {}).get("public_id")
        if public_id:
            get_attachment_store().destroy(public_id)

        Message.objects.filter(chat_id=chat.pk).delete()
        chat.delete()

    @classmethod
    def list_chats(cls, user: User) -> list[Chat]:
        """Chats the user belongs to, newest activity first."""
        return list(
            cls._chat_queryset()
            .filter(members=user)
            .order_by("-updated_at", "-id")
            .distinct()
        )

    @classmethod
    def find_private_chat(cls, user_a: User, user_b: User) -> Chat | None:
        """
        Private chat whose member set is exactly {user_a, user_b}.

        Returns:
            The chat, or None when the pair has none
        """
        target = {user_a.pk, user_b.pk}
        candidates = (
            Chat.objects.filter(is_group=False, members=user_a)
            .filter(members=user_b)
            .distinct()
        )
        for chat in candidates:
            if chat.member_ids() == target:
                return chat
        return None

    @classmethod
    def create_chat(
        cls,
        user: User,
        members: Iterable | None,
        is_group: bool = False,
        group_name: str | None = None,
    ) -> Chat:
        """
        Create a private or group chat.

        The requester is always a member. Private chats need exactly two
        members, groups at least three. The group creator becomes admin and
        a blank group name is derived from the member names.

        Args:
            user: Requesting user
            members: Ids of the other members (duplicates allowed)
            is_group: Group (True) or private (False)
            group_name: Optional group name

        Returns:
            The created Chat

        Raises:
            ValidationError: Missing members or wrong member count
            NotFoundError: A member id does not resolve to a user
            ConflictError: Private chat between the pair already exists
        """
        members = list(members or [])
        if not members:
            raise ValidationError("Members are required")

        member_ids = list(dict.fromkeys([*members, user.pk]))

        if not is_group and len(member_ids) != CHAT_CONFIG.PRIVATE_CHAT_MEMBERS:
            raise ValidationError("Private chat must have exactly 2 members")
        if is_group and len(member_ids) < CHAT_CONFIG.MIN_GROUP_MEMBERS:
            raise ValidationError("Group chat must have at least 3 members")

        users = cls._resolve_users(member_ids)

        if not is_group:
            if cls.find_private_chat(*users) is not None:
                raise ConflictError("Chat already exists")
            with cls.atomic():
                chat = Chat.objects.create(is_group=False)
                chat.members.set(users)
            cls.get_logger().info(f"User {user.id} created private chat {chat.id}")
            return cls._get_chat(chat.pk)

        group_name = (group_name or "").strip() or derive_group_name(
            [u.full_name for u in users]
        )
        with cls.atomic():
            chat = Chat.objects.create(
                is_group=True,
                group_name=group_name,
                group_admin=user,
            )
            chat.members.set(users)

        cls.get_logger().info(
            f"User {user.id} created group chat {chat.id} with {len(users)} members"
        )
        return cls._get_chat(chat.pk)

    @classmethod
    def get_chat(cls, user: User, chat_id) -> Chat:
        """
        Raises:
            NotFoundError: Chat does not exist
            ForbiddenError: Requester is not a member
        """
        return cls._get_member_chat(user, chat_id)

    @classmethod
    def update_chat(
        cls,
        user: User,
        chat_id,
        *,
        members: Iterable | None = None,
        group_name: str | None = None,
        group_admin_id=None,
        group_avatar: File | None = None,
    ) -> Chat:
        """
        Patch a group chat. Only provided fields change.

        Any member may rename the group, replace its member set or change
        its avatar; only the admin may hand the admin role to someone else.
        The admin always has to be a member of the resulting member set.

        Args:
            user: Requesting user
            chat_id: Chat to update
            members: Replacement member ids
            group_name: New name; blank values are ignored
            group_admin_id: New admin id (admin only)
            group_avatar: New avatar file; replaces the stored one

        Raises:
            NotFoundError: Chat or a member does not exist
            ValidationError: Private chat, too few members, admin outside members
            ForbiddenError: Not a member, or non-admin changing the admin
            ExternalServiceError: Attachment store failure
        """
        with cls.atomic():
            chat = cls._get_chat(chat_id, lock=True)

            if chat.is_private:
                raise ValidationError("Private chat cannot be updated")
            if not chat.has_member(user):
                raise ForbiddenError("Unauthorized")
            if group_admin_id is not None and chat.group_admin_id != user.pk:
                raise ForbiddenError("Only group admin can update")

            new_users = None
            member_ids = chat.member_ids()
            if members is not None:
                requested_ids = list(dict.fromkeys(members))
                if len(requested_ids) < CHAT_CONFIG.MIN_GROUP_MEMBERS:
                    raise ValidationError("Group chat must have at least 3 members")
                new_users = cls._resolve_users(requested_ids)
                member_ids = set(requested_ids)

            admin_id = (
                group_admin_id if group_admin_id is not None else chat.group_admin_id
            )
            if admin_id is not None and admin_id not in member_ids:
                raise ValidationError("New admin must be a member of the group")

            changed = []
            if new_users is not None:
                chat.members.set(new_users)
                changed.append("members")

            if group_name is not None and group_name.strip():
                chat.group_name = group_name.strip()
                changed.append("group_name")

            if group_admin_id is not None:
                chat.group_admin_id = group_admin_id
                changed.append("group_admin")

            if group_avatar is not None:
                store = get_attachment_store()
                if chat.group_avatar.get("public_id"):
                    store.destroy(chat.group_avatar["public_id"])
                result = store.upload(
                    group_avatar, folder=CHAT_CONFIG.GROUP_AVATAR_FOLDER
                )
                chat.group_avatar = {"url": result.url, "public_id": result.public_id}
                changed.append("group_avatar")

            chat.save()

        cls.get_logger().info(
            f"User {user.id} updated chat {chat.id}: {', '.join(changed) or 'no changes'}"
        )
        return cls._get_chat(chat.pk)

    @classmethod
    def delete_chat(cls, user: User, chat_id) -> None:
        """
        Delete a group chat.

        The stored avatar is destroyed and every message of the chat is
        soft deleted before the chat row goes.

        Raises:
            NotFoundError: Chat does not exist
            ValidationError: Private chat
            ForbiddenError: Requester is not the admin
        """
        with cls.atomic():
            chat = cls._get_chat(chat_id, lock=True)

            if chat.is_private:
                raise ValidationError("Cannot delete private chat")
            if chat.group_admin_id != user.pk:
                raise ForbiddenError("Only admin can delete group")

            cls._destroy_group(chat)

        cls.get_logger().info(f"User {user.id} deleted group chat {chat_id}")

    @classmethod
    def leave_chat(cls, user: User, chat_id, new_admin_id=None) -> LeaveResult:
        """
        Leave a group chat.

        An admin leaving a group with other members must appoint one of
        them as the new admin. When the last member leaves, the group is
        deleted the same way delete_chat() does it.

        Raises:
            NotFoundError: Chat does not exist
            ValidationError: Private chat, or missing/invalid new admin
            ForbiddenError: Requester is not a member
        """
        with cls.atomic():
            chat = cls._get_chat(chat_id, lock=True)

            if chat.is_private:
                raise ValidationError("Private chat cannot be left")

            member_ids = chat.member_ids()
            if user.pk not in member_ids:
                raise ForbiddenError("You are not a member of this group")

            remaining = member_ids - {user.pk}
            is_admin = chat.group_admin_id == user.pk

            if is_admin and remaining:
                if new_admin_id is None:
                    raise ValidationError("Please appoint a new admin before leaving")
                if new_admin_id not in remaining:
                    raise ValidationError("New admin must be a member of the group")

            chat.members.remove(user)

            if not remaining:
                cls._destroy_group(chat)
                cls.get_logger().info(
                    f"Group chat {chat_id} deleted after last member {user.id} left"
                )
                return LeaveResult(chat=None, deleted=True)

            if is_admin:
                chat.group_admin_id = new_admin_id
            chat.save()

        cls.get_logger().info(f"User {user.id} left chat {chat_id}")
        return LeaveResult(chat=cls._get_chat(chat_id), deleted=False)

    @classmethod
    def get_or_create_private_chat(cls, user_a: User, user_b: User) -> Chat:
        """
        Private chat between two users, created when missing.

        Used when a friend request is accepted. Two concurrent calls for
        the same pair may both create a chat.
        """
        chat = cls.find_private_chat(user_a, user_b)
        if chat is not None:
            return chat

        with cls.atomic():
            chat = Chat.objects.create(is_group=False)
            chat.members.set([user_a, user_b])

        cls.get_logger().info(
            f"Provisioned private chat {chat.id} for users {user_a.id} and {user_b.id}"
        )
        return chat


# =============================================================================
# Message Service
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Send text or attachments to a chat
        list_messages: Page through a chat's messages, newest first
        delete_message: Soft delete own message
        react_to_message: Add, replace or remove a reaction
    """

    @staticmethod
    def _get_message(message_id) -> Message:
        message = Message.objects.filter(pk=message_id).first()
        if message is None:
            raise NotFoundError("Message not found", details={"message_id": message_id})
        return message

    @classmethod
    def _upload_attachments(cls, files: Sequence[File]) -> list[dict]:
        """
        Upload files concurrently to the attachment folder.

        Returns:
            Descriptors {url, public_id, name, size}, one per file, in
            the order the files were given
        """
        store = get_attachment_store()

        def upload(file) -> dict:
            result = store.upload(file, folder=ATTACHMENT_CONFIG.FOLDER)
            return {
                "url": result.url,
                "public_id": result.public_id,
                "name": os.path.basename(getattr(file, "name", "") or ""),
                "size": result.bytes,
            }

        workers = max(1, min(settings.ATTACHMENT_UPLOAD_WORKERS, len(files)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(upload, files))

    @classmethod
    def send_message(
        cls,
        user: User,
        chat_id,
        message_type: str,
        text: str | None = None,
        files: Sequence[File] | None = None,
        reply_to_id=None,
    ) -> Message:
        """
        Send a message to a chat.

        Image messages keep every uploaded file; video, audio and file
        messages keep the first one. The chat's latest message pointer
        moves to the new message and its activity timestamp is touched.

        Args:
            user: Sender, must be a member
            chat_id: Target chat
            message_type: text, image, video, audio or file
            text: Body of text messages
            files: Uploaded files for the other types
            reply_to_id: Optional message of the same chat to reply to

        Raises:
            NotFoundError: Chat or reply target does not exist
            ForbiddenError: Sender is not a member
            ValidationError: Bad type or missing content
            ExternalServiceError: Attachment store failure
        """
        chat = ChatService._get_member_chat(user, chat_id)

        files = list(files or [])
        validate_content(message_type, text, len(files))
        if len(files) > ATTACHMENT_CONFIG.MAX_FILES_PER_MESSAGE:
            raise ValidationError(
                f"At most {ATTACHMENT_CONFIG.MAX_FILES_PER_MESSAGE} files per message"
            )

        reply_to = None
        if reply_to_id is not None:
            reply_to = Message.objects.filter(pk=reply_to_id, chat_id=chat.pk).first()
            if reply_to is None:
                raise NotFoundError(
                    "Reply target not found", details={"reply_to": reply_to_id}
                )

        descriptors = (
            [] if message_type == MessageType.TEXT else cls._upload_attachments(files)
        )
        payload = build_payload(message_type, text=text, descriptors=descriptors)

        with cls.atomic():
            message = Message(chat=chat, sender=user, reply_to=reply_to)
            payload.apply(message)
            message.save()

            chat.latest_message = message
            chat.save(update_fields=["latest_message", "updated_at"])

        cls.get_logger().info(
            f"User {user.id} sent {message_type} message {message.id} to chat {chat.id}"
        )
        return message

    @classmethod
    def list_messages(
        cls,
        user: User,
        chat_id,
        page: int = MESSAGE_CONFIG.DEFAULT_PAGE,
        limit: int = MESSAGE_CONFIG.DEFAULT_PAGE_SIZE,
    ) -> MessagePage:
        """
        Page through a chat's messages, newest first.

        Soft deleted messages are included and flagged. limit is capped at
        settings.MESSAGE_PAGE_SIZE_MAX.

        Raises:
            NotFoundError: Chat does not exist
            ForbiddenError: Requester is not a member
            ValidationError: page or limit below 1
        """
        if page < 1 or limit < 1:
            raise ValidationError(
                "Page and limit must be positive integers",
                details={"page": page, "limit": limit},
            )
        limit = min(limit, settings.MESSAGE_PAGE_SIZE_MAX)

        chat = ChatService._get_member_chat(user, chat_id)

        queryset = (
            Message.objects.filter(chat_id=chat.pk)
            .select_related("sender", "reply_to", "reply_to__sender")
            .prefetch_related("reactions")
            .order_by("-created_at", "-id")
        )
        total = queryset.count()
        offset = (page - 1) * limit

        return MessagePage(
            messages=list(queryset[offset : offset + limit]),
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_messages=total,
        )

    @classmethod
    def delete_message(cls, user: User, message_id) -> Message:
        """
        Soft delete a message sent by the requester.

        The content is kept. The owning chat's latest message pointer is
        cleared, whichever message it pointed to.

        Raises:
            NotFoundError: Message does not exist
            ForbiddenError: Requester is not the sender
        """
        message = cls._get_message(message_id)
        if message.sender_id != user.pk:
            raise ForbiddenError("Unauthorized")

        with cls.atomic():
            message.soft_delete()
            Chat.objects.filter(pk=message.chat_id).update(latest_message=None)

        cls.get_logger().info(f"User {user.id} deleted message {message.id}")
        return message

    @classmethod
    def react_to_message(
        cls, user: User, message_id, reaction_type: str
    ) -> MessageReaction | None:
        """
        Toggle a reaction.

        No reaction yet: add it. Same type again: remove it. Other type:
        replace it.

        Returns:
            The user's reaction after the toggle, or None when removed

        Raises:
            NotFoundError: Message does not exist
            ForbiddenError: Requester is not a member of the message's chat
            ValidationError: Unknown reaction type
        """
        message = cls._get_message(message_id)

        chat = Chat.objects.filter(pk=message.chat_id).first()
        if chat is None or not chat.has_member(user):
            raise ForbiddenError("Unauthorized")

        if reaction_type not in ReactionType.values:
            raise ValidationError("Invalid reaction type")

        with cls.atomic():
            existing = (
                MessageReaction.objects.select_for_update()
                .filter(message=message, user=user)
                .first()
            )

            if existing is None:
                reaction = MessageReaction.objects.create(
                    message=message, user=user, reaction_type=reaction_type
                )
                action = "added"
            elif existing.reaction_type == reaction_type:
                existing.delete()
                reaction = None
                action = "removed"
            else:
                existing.reaction_type = reaction_type
                existing.save(update_fields=["reaction_type", "updated_at"])
                reaction = existing
                action = "replaced"

        cls.get_logger().info(
            f"User {user.id} {action} reaction {reaction_type} on message {message.id}"
        )
        return reaction
