"""Root conftest — shared test configuration."""

import os

# Settings are cached on first import; these must be set before any app import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RESEND_API_KEY", "re_test_fake_key")
os.environ.setdefault("LOG_FORMAT", "text")
