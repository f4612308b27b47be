"""
NeoLayer Store API — Application Package Initializer
=====================================================

What: Marks the `store_api` directory as a Python package.
Why:  Enables module imports like `from store_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same thin layering for every collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Store Logic)      │  ← validation, document building
    ├─────────────────────────────────────┤
    │     Documents & Schemas (Data)      │  ← ObjectId/JSON helpers + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← pymongo async collections
    └─────────────────────────────────────┘

    Collections are never module globals: the startup phase builds a
    StoreContext and routes receive it through FastAPI's dependency injection.
"""

__version__ = "1.0.0"
