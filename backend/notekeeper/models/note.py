"""
Notekeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase.
Who:   Used by SqlAlchemyNoteStore for all CRUD statements.

Table:
    notes(id serial primary key, datetime timestamptz, title varchar(255), text text)

    - id: assigned by the database on insert, never by the caller
    - datetime: the user-supplied date of the note, stored timezone-aware (UTC)
    - title: 1-255 characters, enforced by validation before insert
    - text: unbounded
"""

import datetime as dt

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base

# Range of the serial (int4) id column
ID_MIN = 1
ID_MAX = 2**31 - 1


class Note(Base):
    """
    A single note row.

    Lifecycle:
        1. Inserted by create (id assigned by the database)
        2. Overwritten in place by update (datetime, title, text; id stable)
        3. Removed permanently by delete
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    datetime: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', datetime='{self.datetime}')>"
