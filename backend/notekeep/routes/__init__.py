# Routes package init
"""
NoteKeep Backend — Routes Package
===================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:        GET/POST/PUT/DELETE /api/notes   (JSON CRUD)
    - auth.py:         /api/auth/*                      (Google sign-in, session, sign-out)
    - access_code.py:  GET/OPTIONS /api/access-code     (upstream passthrough)
    - ui.py:           /ui/login, /ui/notes             (server-rendered pages)
    - health.py:       GET /health                      (service health check)

Design Principle:
    Routes stay thin: pull values out of the request, call a service,
    shape the response. Business logic belongs in services.
"""
