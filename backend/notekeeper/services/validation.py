"""
Notekeeper Backend — Input Sanitization and Validation
========================================================

What:  The two checks every write goes through before reaching the store.
How:   sanitize() strips markup from string input with nh3 (script and style
       contents are dropped entirely). validate() runs the field rules
       on the sanitized values and collects every violation.

Order (see NoteService.create / update):
    raw input → sanitize → validate → persist (only if no errors)
"""

import datetime as dt
from typing import Any, List, Optional

import nh3

from notekeeper.schemas.note import FieldError

TITLE_MAX_LENGTH = 255

TITLE_MESSAGE = "Title must be a string of length 1 to 255 characters"
TEXT_MESSAGE = "Text must be a string"
DATETIME_MESSAGE = "Datetime must be ISO 8601 date"


def sanitize(value: Any) -> Any:
    """
    Removes all HTML markup from a string.

    nh3 entity-encodes the text it keeps. `&amp;` is turned back into `&` so
    plain text round-trips; `&lt;` and `&gt;` stay encoded so no markup can
    reappear. Non-string values are returned untouched so validate() can
    reject them.
    """
    if not isinstance(value, str):
        return value
    return nh3.clean(value, tags=set()).replace("&amp;", "&")


def parse_datetime(value: Any) -> Optional[dt.datetime]:
    """
    Parses an ISO 8601 date or date/time into an aware UTC datetime.

    Returns None when the value cannot be parsed, or when its UTC equivalent
    falls outside the years 1-9999. Values without an offset are taken to be
    UTC.
    """
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dt.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    try:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=dt.timezone.utc)
        return parsed.astimezone(dt.timezone.utc)
    except (OverflowError, ValueError):
        return None


def validate(title: Any, text: Any, datetime: Any) -> List[FieldError]:
    """
    Checks the three note fields independently.

    Returns:
        An empty list when every field is valid, otherwise one FieldError
        per failing field, in field order (title, text, datetime).
    """
    errors: List[FieldError] = []

    if not isinstance(title, str) or not 1 <= len(title) <= TITLE_MAX_LENGTH:
        errors.append(FieldError(field="title", message=TITLE_MESSAGE))

    if not isinstance(text, str):
        errors.append(FieldError(field="text", message=TEXT_MESSAGE))

    if parse_datetime(datetime) is None:
        errors.append(FieldError(field="datetime", message=DATETIME_MESSAGE))

    return errors
