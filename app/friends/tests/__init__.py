"""
Tests for friends app.

This package contains test modules for:
- test_models.py: FriendRequest model tests
- test_services.py: FriendService workflow tests
- test_views.py: REST API endpoint tests
"""
