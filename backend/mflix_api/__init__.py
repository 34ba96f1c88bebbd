"""
Mflix API - Application Package Initializer
============================================

What: Marks the `mflix_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn mflix_api.main:app`) and by pytest.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← verbs, paths, 405 dispatch
    ├─────────────────────────────────────┤
    │   Services (Resource Handlers)      │  ← id validation, queries, envelopes
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← typed documents + response envelope
    ├─────────────────────────────────────┤
    │          Store (Persistence)        │  ← MongoDB through Motor
    └─────────────────────────────────────┘

    Routes never talk to the store directly; resource services receive a
    Store capability through FastAPI dependency injection.
"""

__version__ = "1.0.0"
