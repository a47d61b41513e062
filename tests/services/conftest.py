"""Service test fixtures — async DB, fake email provider, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.db holds a manager over the test engine, exactly as the lifespan
      would install the production one; get_db itself is not overridden
    - outbox replaces the Resend sender: no test performs network IO

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from sefask.api.dependencies import get_email_sender, get_password_hasher
from sefask.core.errors import EmailDeliveryError
from sefask.db.base import Base
from sefask.infrastructure.database import DatabaseSessionManager
from sefask.main import app


class FakeEmailSender:
    """Records verification emails instead of sending them."""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False

    async def send_verification_code(self, to_email, first_name, code):
        if self.fail:
            raise EmailDeliveryError("provider returned 503")
        self.sent.append({"to": to_email, "first_name": first_name, "code": code})

    def last_code(self, to_email: str) -> str:
        codes = [m["code"] for m in self.sent if m["to"] == to_email]
        assert codes, f"no verification email sent to {to_email}"
        return codes[-1]

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )

@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session

@pytest.fixture
def outbox():
    return FakeEmailSender()

@pytest.fixture
def hasher():
    return get_password_hasher()


@pytest.fixture
async def client(test_engine, outbox):
    """FastAPI test client on the test engine, with the email sender replaced."""
    app.state.db = DatabaseSessionManager(test_engine)
    app.dependency_overrides[get_email_sender] = lambda: outbox

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db
