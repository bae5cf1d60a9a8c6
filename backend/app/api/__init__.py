"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is JSON, errors included

Design Decisions:
    - Thin routes delegate to services: validation and resolution live outside FastAPI
"""
