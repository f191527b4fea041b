"""
Notekeeper Backend — Note Service (Business Logic)
====================================================

What:  The five note operations: create, read all, read one, update, delete.
How:   Each operation makes exactly one call on the injected NoteStore and
       returns a tagged result (services/results.py).
Who:   Called by the route handlers in routes/notes.py.

Write path (create / update):
    ┌──────────┐    ┌────────────┐    ┌────────────┐    ┌──────────┐
    │  Input   │───▶│  Sanitize  │───▶│  Validate  │───▶│  Store   │
    └──────────┘    └────────────┘    └────────────┘    └──────────┘
                                            │ errors
                                            ▼
                                   ValidationFailed (nothing written)

Error handling:
    The store raises DatabaseError for any backend failure. Every operation
    converts it to StoreFault, so no exception escapes the service.
"""

import logging

from notekeeper.exceptions import DatabaseError
from notekeeper.schemas.note import NoteInput
from notekeeper.services.note_store import NoteStore
from notekeeper.services.results import (
    NotFound,
    Ok,
    Result,
    StoreFault,
    ValidationFailed,
)
from notekeeper.services.validation import parse_datetime, sanitize, validate

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless apart from the store it is given, so one instance per request
    is cheap.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    async def create(self, note: NoteInput) -> Result:
        """
        Sanitizes, validates and inserts a new note.

        Returns:
            Ok(NoteResponse) with the generated id,
            ValidationFailed(errors) when any field is invalid,
            StoreFault(cause) when the insert fails.
        """
        title, text, datetime = self._sanitized(note)
        errors = validate(title, text, datetime)
        if errors:
            logger.info("Rejected note: %d invalid field(s)", len(errors))
            return ValidationFailed(errors)

        try:
            created = await self.store.add(title, text, parse_datetime(datetime))
        except DatabaseError as e:
            return self._fault("create", e)

        logger.info("Note %s created", created.id)
        return Ok(created)

    async def read_all(self) -> Result:
        """Returns Ok(list of notes), an empty list when there are none."""
        try:
            notes = await self.store.list()
        except DatabaseError as e:
            return self._fault("read_all", e)
        return Ok(notes)

    async def read_one(self, note_id: int) -> Result:
        """Returns Ok(note), NotFound() or StoreFault(cause)."""
        try:
            note = await self.store.get(note_id)
        except DatabaseError as e:
            return self._fault("read_one", e)

        if note is None:
            logger.info("Note %s not found", note_id)
            return NotFound()
        return Ok(note)

    async def update(self, note_id: int, note: NoteInput) -> Result:
        """
        Overwrites title, text and datetime of an existing note.

        Validation runs before the store is touched, so invalid input never
        reaches the target row, whether or not that row exists.
        """
        title, text, datetime = self._sanitized(note)
        errors = validate(title, text, datetime)
        if errors:
            logger.info("Rejected update of note %s: %d invalid field(s)", note_id, len(errors))
            return ValidationFailed(errors)

        try:
            updated = await self.store.replace(note_id, title, text, parse_datetime(datetime))
        except DatabaseError as e:
            return self._fault("update", e)

        if updated is None:
            logger.info("Note %s not found for update", note_id)
            return NotFound()

        logger.info("Note %s updated", note_id)
        return Ok(updated)

    async def delete(self, note_id: int) -> Result:
        """Returns Ok(None) when exactly one note was removed, NotFound() when none was."""
        try:
            removed = await self.store.remove(note_id)
        except DatabaseError as e:
            return self._fault("delete", e)

        if removed != 1:
            logger.info("Note %s not found for delete", note_id)
            return NotFound()

        logger.info("Note %s deleted", note_id)
        return Ok(None)

    @staticmethod
    def _sanitized(note: NoteInput):
        return sanitize(note.title), sanitize(note.text), sanitize(note.datetime)

    @staticmethod
    def _fault(operation: str, error: DatabaseError) -> StoreFault:
        logger.error(
            "Database error during %s: %s | Context: %s",
            operation,
            error.message,
            error.context,
            exc_info=error,
        )
        return StoreFault(error)
