"""
Notekeeper Backend — Note Store
=================================

What:  Storage client used by NoteService for every database round trip.
How:   NoteStore is the abstract contract; SqlAlchemyNoteStore implements it
       on top of a request-scoped AsyncSession.
Who:   Built per request by the get_note_store dependency (routes/notes.py).
       Tests substitute an in-memory implementation.

Contract:
    - Every method is one statement against the backing store.
    - Records are returned as NoteResponse objects, never ORM instances.
    - Every backend failure is raised as DatabaseError; callers never see
      driver exceptions.
    - An id the column cannot hold is treated as missing and never sent to
      the driver.
"""

import datetime as dt
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import DatabaseError
from notekeeper.models.note import ID_MAX, ID_MIN, Note
from notekeeper.schemas.note import NoteResponse

logger = logging.getLogger(__name__)


def _storable_id(note_id: int) -> bool:
    return ID_MIN <= note_id <= ID_MAX


class NoteStore(ABC):
    """Abstract interface over the notes table."""

    @abstractmethod
    async def add(self, title: str, text: str, datetime: dt.datetime) -> NoteResponse:
        """Inserts a note and returns it with its generated id."""
        ...

    @abstractmethod
    async def list(self) -> List[NoteResponse]:
        """Returns every note in scan order."""
        ...

    @abstractmethod
    async def get(self, note_id: int) -> Optional[NoteResponse]:
        """Returns the note with the given id, or None."""
        ...

    @abstractmethod
    async def replace(
        self, note_id: int, title: str, text: str, datetime: dt.datetime
    ) -> Optional[NoteResponse]:
        """Overwrites the mutable fields of a note. Returns None if there is no such note."""
        ...

    @abstractmethod
    async def remove(self, note_id: int) -> int:
        """Deletes a note and returns the number of rows removed (0 or 1)."""
        ...


class SqlAlchemyNoteStore(NoteStore):
    """
    NoteStore backed by the `notes` table through an AsyncSession.

    Writes are flushed inside each call so constraint and connection errors
    surface here; the commit itself belongs to get_db_session(). A failed
    statement rolls the session back before DatabaseError is raised.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, title: str, text: str, datetime: dt.datetime) -> NoteResponse:
        try:
            note = Note(title=title, text=text, datetime=datetime)
            self.session.add(note)
            await self.session.flush()
            return NoteResponse.model_validate(note)
        except SQLAlchemyError as e:
            raise await self._fail(e, "insert") from e

    async def list(self) -> List[NoteResponse]:
        try:
            result = await self.session.execute(select(Note).order_by(Note.id))
            return [NoteResponse.model_validate(note) for note in result.scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail(e, "select") from e

    async def get(self, note_id: int) -> Optional[NoteResponse]:
        if not _storable_id(note_id):
            return None
        try:
            result = await self.session.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail(e, "select", note_id) from e
        if note is None:
            return None
        return NoteResponse.model_validate(note)

    async def replace(
        self, note_id: int, title: str, text: str, datetime: dt.datetime
    ) -> Optional[NoteResponse]:
        if not _storable_id(note_id):
            return None
        try:
            result = await self.session.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(datetime=datetime, title=title, text=text)
                .returning(Note)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail(e, "update", note_id) from e
        if note is None:
            return None
        return NoteResponse.model_validate(note)

    async def remove(self, note_id: int) -> int:
        if not _storable_id(note_id):
            return 0
        try:
            result = await self.session.execute(
                delete(Note).where(Note.id == note_id)
            )
            return result.rowcount
        except SQLAlchemyError as e:
            raise await self._fail(e, "delete", note_id) from e

    async def _fail(
        self, error: SQLAlchemyError, operation: str, note_id: Optional[int] = None
    ) -> DatabaseError:
        """Rolls the session back so the request can still finish, then wraps the error."""
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after failed %s also failed", operation, exc_info=True)

        context = {"operation": operation, "error_type": type(error).__name__}
        if note_id is not None:
            context["note_id"] = note_id
        return DatabaseError(context=context)
