# Services package init
"""
Notekeeper Backend — Services Layer
=====================================

What:  Business logic between the routes (HTTP) and the database.

Service Inventory:
    - NoteService: sanitize → validate → store for the five note operations
    - NoteStore (abstract) / SqlAlchemyNoteStore: one statement per call
    - validation: sanitize(), validate(), parse_datetime()
    - results: Ok / ValidationFailed / NotFound / StoreFault
"""
