"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, ChatMember, Message model and manager tests
- test_services.py: Command handler tests (chats, groups, messages)
- test_queries.py: Query handler tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
