"""
CarLookup Backend: Application Package Initializer
===================================================

What: Marks the `carlookup` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered request pipeline:

    ┌─────────────────────────────────────┐
    │      Routes (HTTP adapters)         │  ← status codes, headers, envelopes
    ├─────────────────────────────────────┤
    │   Managers (business rules)         │  ← validation, existence/conflict checks
    ├─────────────────────────────────────┤
    │   Unit of Work (transactions)       │  ← one session per request, retry policy
    ├─────────────────────────────────────┤
    │   Repositories (queries)            │  ← filtering, ordering, paging
    ├─────────────────────────────────────┤
    │   Models & Schemas (data)           │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Errors raised anywhere below the routes travel up untouched and are turned
    into response envelopes exactly once, by the exception mapping chain.
"""

__version__ = "1.0.0"
