"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators return error collections; state transitions raise typed errors

Design Decisions:
    - Functional core separated from imperative shell
"""
