"""DocChat - conversational Q&A over a document corpus.

A thin FastAPI backend sits between a NiceGUI browser client and an external
workflow-automation webhook that does the actual retrieval and answer
generation. The backend retries the webhook, normalizes its loosely shaped
answers into one message format, keeps chat history in memory, and proxies
PDFs for the document preview pane.

Components:
    - api: HTTP endpoints (auth, chat, sessions, documents, PDF proxy)
    - webhook: webhook client, response normalization, offline fallback
    - storage: in-memory users, login sessions and chat history
    - documents: Google Drive link helpers and PDF download
    - parsing: PDF text extraction and line-range highlighting
    - ui: NiceGUI pages for login, chat and document preview
    - models: Request/response schemas
"""

__version__ = "0.1.0"
