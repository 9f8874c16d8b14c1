"""
Employee API — Application Package Initializer
================================================

What: Marks the `employee_api` directory as a Python package.
Who:  Imported by uvicorn (`employee_api.main:app`), pytest and the seeder.

Architecture Note:
    ┌─────────────────────────────────────┐
    │        Routes (HTTP surface)        │  ← payload parsing, Result → HTTP
    ├─────────────────────────────────────┤
    │     Mediator (dispatch pipeline)    │  ← logging, validation, unit of work
    ├─────────────────────────────────────┤
    │      Handlers (one per use case)    │  ← business rules, DTO mapping
    ├─────────────────────────────────────┤
    │   Repositories + Unit of Work       │  ← SQLAlchemy queries, commit point
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
