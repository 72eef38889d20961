"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses or 204

Design Decisions:
    - Thin routes delegate to the dog client and UserStore
"""
