"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per app (created in the lifespan, held on app.state.db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
