"""NiceGUI interface - thin visualization layer for the document chat.

Responsibilities:
    - Login page and per-browser login storage
    - Chat thread with markdown answers and document reference cards
    - History and document sidebars with search and pagination
    - Document preview pane with line-range highlighting

Contains minimal business logic. Delegates all operations to the API.
"""
