"""
Vehicle Registry Backend — Application Package Initializer
===========================================================

What: Marks the `vehicle_api` directory as a Python package.
Why:  Enables module imports like `from vehicle_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend keeps the usual layered split, even at this small size:

    ┌─────────────────────────────────────┐
    │     Routes + Security (API Layer)   │  ← HTTP concerns, bearer-token gate
    ├─────────────────────────────────────┤
    │      Services (Record Store)        │  ← add / count / clear
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (in-memory SQLite)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Records live only for the lifetime of the process. There is no on-disk
    representation and no migration history.
"""

__version__ = "1.0.0"
