"""
LinkShelf Backend — Application Package Initializer
====================================================

What: Marks the `linkshelf` directory as a Python package.
Who:  Imported by uvicorn (`linkshelf.main:app`), pytest, and `python -m linkshelf`.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validation, Mapping)  │  ← Required fields, tags JSON, errors
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every route maps to exactly one SQL statement; there is no
    multi-statement workflow anywhere in the service.
"""

__version__ = "1.0.0"
