"""
Chat app for messaging.

This app handles:
- Chats (private and group) and their membership
- Message sending and history
- Message reactions

Related apps:
    - authentication: User model for members and senders
    - friends: Accepting a friend request provisions a private chat

Usage:
    from chat.services import ChatService, MessageService

    # Create a private chat
    chat = ChatService.create_chat(user, members=[other_user.id])

    # Send message
    message = MessageService.send_message(user, chat.id, "text", text="Hello!")
"""
