"""Services Layer — request normalization and cache-aside favicon resolution.

Invariants:
    - Normalizer is pure; only the resolver performs IO (through protocols)
    - Services never import FastAPI

Design Decisions:
    - One module per pipeline stage for locality
"""
