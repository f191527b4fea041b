"""
Notekeeper Backend — Service Results
======================================

What:  Tagged result types returned by NoteService.
How:   Every service operation returns exactly one of these. The router maps
       each variant to an HTTP status code; nothing here knows about HTTP.

    Ok(value)                → the operation succeeded
    ValidationFailed(errors) → input rejected, nothing written
    NotFound()               → no note with the given id
    StoreFault(cause)        → the database failed
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from notekeeper.exceptions import DatabaseError
from notekeeper.schemas.note import FieldError


@dataclass(frozen=True)
class Ok:
    value: Any = None


@dataclass(frozen=True)
class ValidationFailed:
    errors: List[FieldError] = field(default_factory=list)

    def body(self) -> List[Dict[str, str]]:
        return [error.model_dump() for error in self.errors]


@dataclass(frozen=True)
class NotFound:
    message: str = "Note not found"

    def body(self) -> Dict[str, str]:
        return {"error": self.message}


@dataclass(frozen=True)
class StoreFault:
    cause: DatabaseError


Result = Union[Ok, ValidationFailed, NotFound, StoreFault]
