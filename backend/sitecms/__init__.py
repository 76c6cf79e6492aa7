"""
SiteCMS Backend: Application Package Initializer
=================================================

What: Marks the `sitecms` directory as a Python package.
Who:  Used by uvicorn (`sitecms.main:app`), pytest and `python -m sitecms`.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services / Repositories           │  ← Auth, uploads, schema, seeding, CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy on one SQLite file
    └─────────────────────────────────────┘

    Repositories are built per request around the request's session and
    handed to route handlers through FastAPI dependencies; there is no
    process-wide store handle.
"""

__version__ = "1.0.0"
