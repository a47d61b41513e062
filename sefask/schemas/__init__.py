"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas check wire types only; domain rules (presence, formats, question
      integrity) belong to core/ validators so every violation is reported together
    - Wire format is camelCase; Python attributes are snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
