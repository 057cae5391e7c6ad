"""API Layer — FastAPI routes, response envelope helpers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Success bodies carry a `message` (mutations) or a list (reads); failures a single `error`

Design Decisions:
    - Thin routes delegate to services/ handler classes
"""
