"""
Notekeeper Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for failures below the service layer.
How:   Each exception carries a user-safe message and an optional context
       dict. The context is logged, never returned to the client.
Who:   Raised by the note store; converted to a StoreFault result by the
       service; caught by the global handlers in main.py as a last resort.

Exception Hierarchy:
    NotekeeperError (base)
    └── DatabaseError            → 500 Internal Server Error

Expected outcomes (invalid input, missing note) are not exceptions. The
service returns them as tagged results, see services/results.py.
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(NotekeeperError):
    """
    Raised when a database operation fails.

    What:    A query, insert, update or delete could not be executed.
    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error
    is kept in `context` and on `__cause__` for server-side logging.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
