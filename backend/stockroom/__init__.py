"""
Stockroom Backend — Application Package Initializer
=====================================================

What: Marks the `stockroom` directory as a Python package.
Who:  Imported by uvicorn (`stockroom.main:app`), Alembic, pytest and the
      bootstrap CLI.

Architecture Note:
    The backend is split into the same four layers for every resource
    (users, categories, products):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← API-key check, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Required fields, uniqueness,
    │                                     │    cross-entity references
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the ORM directly and services never build HTTP
    responses; errors travel up as exceptions from `stockroom.exceptions`.
"""

__version__ = "1.0.0"
