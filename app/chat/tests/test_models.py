"""
Tests for chat models.

Covers:
- Chat membership helpers
- Message soft deletion and managers
- MessageReaction uniqueness
- Message rows outliving their chat
"""

import pytest
from django.db import IntegrityError

from chat.models import Chat, Message, MessageReaction, ReactionType
from chat.tests.factories import (
    GroupChatFactory,
    MessageFactory,
    MessageReactionFactory,
    PrivateChatFactory,
)


@pytest.mark.django_db
class TestChat:
    """
    Verifies:
    - has_member / member_ids reflect the member set
    - String representation distinguishes private and group chats
    """

    def test_membership_helpers(self, private_chat, alice, bob, outsider):
        assert private_chat.has_member(alice)
        assert private_chat.has_member(bob.pk)
        assert not private_chat.has_member(outsider)
        assert private_chat.member_ids() == {alice.pk, bob.pk}

    def test_is_private(self):
        assert PrivateChatFactory().is_private
        assert not GroupChatFactory().is_private

    def test_str(self, group_chat, private_chat):
        assert str(group_chat) == "Group: Weekend plans"
        assert str(private_chat) == f"Private({private_chat.pk})"

    def test_members_are_a_set(self, private_chat, alice):
        private_chat.members.add(alice)

        assert private_chat.members.count() == 2


@pytest.mark.django_db
class TestMessageSoftDelete:
    """
    Verifies:
    - soft_delete() flags the row and keeps content
    - Queryset delete() soft deletes in bulk
    - Message.active hides deleted rows, Message.objects keeps them
    """

    def test_soft_delete_keeps_row_and_content(self, group_message):
        group_message.soft_delete()

        stored = Message.objects.get(pk=group_message.pk)
        assert stored.is_deleted is True
        assert stored.deleted_at is not None
        assert stored.text == "Hi all"

    def test_queryset_delete_is_soft(self, group_chat, bob):
        MessageFactory.create_batch(3, chat=group_chat, sender=bob)

        count, _ = Message.objects.filter(chat=group_chat).delete()

        assert count == 3
        assert Message.objects.filter(chat=group_chat).count() == 3
        assert Message.active.filter(chat=group_chat).count() == 0

    def test_messages_outlive_deleted_chat(self, group_chat, group_message):
        """
        Deleting the chat row leaves message rows with their chat_id.

        Why it matters: Deleted groups keep an auditable message history.
        """
        chat_id = group_chat.pk
        Message.objects.filter(chat_id=chat_id).delete()

        group_chat.delete()

        assert not Chat.objects.filter(pk=chat_id).exists()
        assert Message.objects.filter(chat_id=chat_id, is_deleted=True).count() == 1


@pytest.mark.django_db
class TestMessageReaction:
    def test_one_reaction_per_user_per_message(self, group_message, alice):
        MessageReactionFactory(message=group_message, user=alice)

        with pytest.raises(IntegrityError):
            MessageReaction.objects.create(
                message=group_message, user=alice, reaction_type=ReactionType.LOVE
            )
