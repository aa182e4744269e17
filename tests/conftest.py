"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from unittest.mock import MagicMock
import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from enums.runtime_environment import RuntimeEnvironment

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.RUNTIME_ENVIRONMENT = RuntimeEnvironment.TEST
config_mock.DB_NAME = ":memory:"  # In-memory test database
config_mock.REDIS_HOST = "localhost"
config_mock.REDIS_PORT = 6379
config_mock.REDIS_PASSWORD = None
config_mock.BOT_LANGUAGE = "en"  # For Localizator
config_mock.ADMIN_ID_LIST = [123456789]  # Test admin ID
config_mock.TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"  # Test bot token
config_mock.NOTIFY_ADMINS_MANUAL_PAYMENT = True
config_mock.PAYMENT_BACKEND_URL = "https://payments.test"
config_mock.PAYMENT_CHECK_TIMEOUT_SECONDS = 5
config_mock.PAYMENT_TIMEOUT_MINUTES = 10
config_mock.POLL_INTERVAL_MS = 4000
config_mock.POLL_INITIAL_DELAY_MS = 4000
config_mock.COUNTDOWN_TICK_MS = 900
config_mock.SUCCESS_REDIRECT_DELAY_MS = 2600
config_mock.NOT_FOUND_REDIRECT_DELAY_MS = 3000
config_mock.MISSING_ORDER_REDIRECT_DELAY_MS = 0  # No waiting in router tests
config_mock.CANCEL_REDIRECT_DELAY_MS = 1000
config_mock.RESUBSCRIBE_DELAY_MS = 3000
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5
config_mock.WEBHOOK_CORS_ALLOWED_ORIGINS = []
config_mock.WEBAPP_HOST = "127.0.0.1"
config_mock.WEBAPP_PORT = 8000

sys.modules['config'] = config_mock


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite shared across sessions)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool
    )

    # Import and create all tables
    from models import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine, monkeypatch):
    """Point db.get_db_session() at the test engine."""
    import db
    monkeypatch.setattr(db, "session_maker", async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    ))
    yield test_engine


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def config():
    """The mocked config module, for tests that tweak values."""
    return config_mock
