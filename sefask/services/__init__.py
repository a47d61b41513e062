"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services orchestrate: validate (core) -> persist (repository) -> side effects
    - Collaborators arrive via constructor injection (see api/dependencies.py)

Design Decisions:
    - One module per entry-point group; repositories live beside the services that use them
"""
