"""
Factory Boy factories for chat models.

Provides realistic test data generation for:
- Chat: Private and group chats with members
- Message: Text and attachment messages
- MessageReaction: One user's reaction to a message

Usage:
    from chat.tests.factories import (
        GroupChatFactory,
        MessageFactory,
        PrivateChatFactory,
    )

    # Create a group chat; members default to admin plus two new users
    chat = GroupChatFactory()

    # Create a private chat between two given users
    chat = PrivateChatFactory(members=[alice, bob])

    # Create a message in a chat
    message = MessageFactory(chat=chat, sender=alice)
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import Chat, Message, MessageReaction, MessageType, ReactionType


class PrivateChatFactory(factory.django.DjangoModelFactory):
    """
    Factory for private chats.

    Without explicit members, two new users are created.

    Examples:
        chat = PrivateChatFactory()
        chat = PrivateChatFactory(members=[alice, bob])
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    is_group = False

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        """Set the member set after the chat is created."""
        if not create:
            return
        self.members.set(extracted or [UserFactory(), UserFactory()])


class GroupChatFactory(factory.django.DjangoModelFactory):
    """
    Factory for group chats with an admin.

    The admin is always a member. Without explicit members, the admin
    and two new users make up the group.

    Examples:
        chat = GroupChatFactory()
        chat = GroupChatFactory(group_admin=alice, members=[alice, bob, carol])
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    is_group = True
    group_name = factory.Sequence(lambda n: f"Group Chat {n}")
    group_admin = factory.SubFactory(UserFactory)

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        """Set the member set, always including the admin."""
        if not create:
            return
        users = list(extracted or [UserFactory(), UserFactory()])
        if self.group_admin is not None and self.group_admin not in users:
            users.append(self.group_admin)
        self.members.set(users)


class MessageFactory(factory.django.DjangoModelFactory):
    """
    Factory for text messages.

    Examples:
        message = MessageFactory(chat=chat, sender=alice)
        message = MessageFactory(chat=chat, sender=alice, text="Hello")
    """

    class Meta:
        model = Message

    chat = factory.SubFactory(PrivateChatFactory)
    sender = factory.SubFactory(UserFactory)
    message_type = MessageType.TEXT
    text = factory.Sequence(lambda n: f"Message {n}")


class ImageMessageFactory(MessageFactory):
    message_type = MessageType.IMAGE
    text = ""
    images = factory.LazyFunction(
        lambda: [
            {
                "url": "https://files.test/chat_attachments/1-a.png",
                "public_id": "chat_attachments/1-a.png",
                "name": "a.png",
                "size": 3,
            }
        ]
    )


class MessageReactionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = MessageReaction

    message = factory.SubFactory(MessageFactory)
    user = factory.SubFactory(UserFactory)
    reaction_type = ReactionType.LIKE
