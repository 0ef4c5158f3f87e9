"""
NoteKeep Backend — Application Package Initializer
===================================================

What: Marks the `notekeep` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same layered shape as any FastAPI service:

    ┌─────────────────────────────────────┐
    │      Routes (API + UI Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Notes, View, Auth)     │  ← Business rules
    ├─────────────────────────────────────┤
    │         Schemas (Pydantic)          │  ← API contracts
    ├─────────────────────────────────────┤
    │        NoteStore (in-memory)        │  ← Process-wide, volatile
    └─────────────────────────────────────┘

    There is no database. The NoteStore is created once by the app factory
    and handed to request handlers through a dependency, so a shared
    datastore can replace it later without touching the routes.
"""

__version__ = "1.0.0"
