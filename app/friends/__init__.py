"""
Friends app.

This app handles:
- Friend requests (send, accept, decline)
- The symmetric friend list on User
- Provisioning a private chat when a request is accepted

Related apps:
    - authentication: User.friends holds accepted friendships
    - chat: ChatService.get_or_create_private_chat
"""
