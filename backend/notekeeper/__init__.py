"""
Notekeeper Backend — Application Package Initializer
=====================================================

A small CRUD service for notes (title, text, datetime) over HTTP.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP status codes and bodies
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← sanitize, validate, results
    ├─────────────────────────────────────┤
    │      Note Store (Storage Client)    │  ← one statement per call
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
