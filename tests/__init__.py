"""Test package for DocChat.

Unit tests cover isolated logic; integration tests drive the FastAPI app
in-process.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests over ASGITransport

External services (the workflow webhook, Google Drive) are replaced by
``httpx.MockTransport`` handlers. PDFs are generated in conftest.
Leverages pytest with pytest-check for soft assertions.
"""
