"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, Message, MessageReaction model tests
- test_payloads.py: Message content validation and payload tests
- test_group_names.py: Derived group name tests
- test_services.py: ChatService and MessageService tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
