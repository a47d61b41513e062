"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to typed errors from core/errors.py

Design Decisions:
    - Thin adapters behind core Protocols, injected via api/dependencies.py
"""
