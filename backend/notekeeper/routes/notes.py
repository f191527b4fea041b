"""
Notekeeper Backend — Notes Route Handlers
===========================================

What:  The five note endpoints, mounted at the application root.
How:   Each handler extracts the body / path id, calls NoteService, and maps
       the tagged result to a status code and JSON body.

    POST   /      create    → 200 note
    GET    /      read all  → 200 [note, ...]
    GET    /{id}  read one  → 200 note
    PUT    /{id}  update    → 200 note
    DELETE /{id}  delete    → 202 (empty body)

Failure outcomes:
    ValidationFailed → 400 [{field, message}, ...]
    NotFound         → 404 {"error": "Note not found"}
    StoreFault       → 500 {"error": "Internal server error", "request_id": ...}

With STRICT_STATUS_CODES=false, validation and not-found outcomes keep their
bodies but are sent with 200.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.config import settings
from notekeeper.database import get_db_session
from notekeeper.middleware.request_id import request_id_var
from notekeeper.schemas.note import (
    ErrorResponse,
    FieldError,
    NoteInput,
    NoteResponse,
    NotFoundResponse,
)
from notekeeper.services.note_service import NoteService
from notekeeper.services.note_store import NoteStore, SqlAlchemyNoteStore
from notekeeper.services.results import (
    NotFound,
    Ok,
    Result,
    StoreFault,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


# ── Dependencies ──────────────────────────────────────────────────────────

def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """One store per request, bound to the request's session."""
    return SqlAlchemyNoteStore(db)


def get_note_service(store: NoteStore = Depends(get_note_store)) -> NoteService:
    return NoteService(store)


# ── Result → HTTP ─────────────────────────────────────────────────────────

def _dump(value):
    if isinstance(value, list):
        return [item.model_dump(mode="json") for item in value]
    return value.model_dump(mode="json")


def to_response(result: Result, success_status: int = 200) -> Response:
    """
    Maps a service result to an HTTP response.

    Ok(None) becomes an empty response with `success_status`.
    """
    if isinstance(result, Ok):
        if result.value is None:
            return Response(status_code=success_status)
        return JSONResponse(status_code=success_status, content=_dump(result.value))

    if isinstance(result, ValidationFailed):
        status = 400 if settings.strict_status_codes else 200
        return JSONResponse(status_code=status, content=result.body())

    if isinstance(result, NotFound):
        status = 404 if settings.strict_status_codes else 200
        return JSONResponse(status_code=status, content=result.body())

    if isinstance(result, StoreFault):
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "request_id": request_id_var.get("")},
        )

    raise TypeError(f"Unexpected service result: {result!r}")


_NOTE_RESPONSES = {
    404: {"description": "Note not found", "model": NotFoundResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}
_INPUT_RESPONSES = {
    400: {"description": "Invalid input", "model": List[FieldError]},
}


# ── Routes ────────────────────────────────────────────────────────────────

@router.post(
    "/",
    response_model=NoteResponse,
    responses={**_INPUT_RESPONSES, 500: _NOTE_RESPONSES[500]},
    summary="Create a note",
)
async def create_note(
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> Response:
    return to_response(await service.create(payload))


@router.get(
    "/",
    response_model=List[NoteResponse],
    responses={500: _NOTE_RESPONSES[500]},
    summary="List all notes",
)
async def read_all_notes(service: NoteService = Depends(get_note_service)) -> Response:
    return to_response(await service.read_all())


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_NOTE_RESPONSES,
    summary="Get a single note by ID",
)
async def read_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> Response:
    return to_response(await service.read_one(note_id))


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_INPUT_RESPONSES, **_NOTE_RESPONSES},
    summary="Replace the title, text and datetime of a note",
)
async def update_note(
    note_id: int,
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> Response:
    return to_response(await service.update(note_id, payload))


@router.delete(
    "/{note_id}",
    status_code=202,
    responses=_NOTE_RESPONSES,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> Response:
    return to_response(await service.delete(note_id), success_status=202)
