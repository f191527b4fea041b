# Routes package init
"""
Notekeeper Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   POST /, GET /, GET /{id}, PUT /{id}, DELETE /{id}
    - health.py:  GET /health

Routes are thin: they extract data from the request, call NoteService, and
turn the returned result into a status code and body.
"""
