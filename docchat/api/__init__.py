"""FastAPI endpoints for DocChat.

Endpoints:
    - GET /health: Service health status
    - POST /api/auth/login, POST /api/auth/logout: Login sessions
    - POST /api/chat: Ask the workflow webhook a question
    - GET /api/chat/{session_id}: Session history
    - GET /api/sessions, DELETE /api/sessions/{session_id}: Session list
    - POST /api/documents: Indexed documents
    - GET /api/proxy/pdf/{file_id}: Same-origin PDF download
    - GET /api/preview/{file_id}: Highlight regions for a cited line range
    - GET /api/test-chatbot-service: Webhook connectivity check
"""

from docchat.api.app import app, create_app

__all__ = ["app", "create_app"]
