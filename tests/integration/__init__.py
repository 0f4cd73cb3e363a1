"""Integration tests for the API working as a system.

Coverage:
    - Login and logout with real password checks
    - Chat round trips through stubbed webhook responses
    - Session history, document list, PDF proxy and preview
    - Webhook connectivity probe

Routes, dependencies, storage and PDF parsing are all real; only outgoing
HTTP is stubbed.
"""
