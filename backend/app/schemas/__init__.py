"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (query params, cached values)
    - Hostname grammar comes from core/ so every layer uses one rule

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
