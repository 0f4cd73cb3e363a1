"""Unit tests for individual components in isolation.

Coverage:
    - config/: Environment loading and validation
    - webhook/: Retry loop, response normalization, formatting, fallback
    - storage/: Users, login sessions and chat history
    - documents/: Drive links and PDF download
    - parsing/: Text extraction and line-range highlighting
    - ui/: Page helpers (markdown, paging, session ids)

Follows single responsibility per test function. Leverages pytest-check for
multiple assertions per test.
"""
