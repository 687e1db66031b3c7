"""Test configuration and fixtures.

Unit tests swap the service collaborators (store, Stripe gateway, event log)
for mocks through ``monkeypatch``; integration tests run the real store
against an in-memory SQLite database per test.
"""

import os
from datetime import date
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Flag test mode before any application module builds its engine
os.environ.setdefault("TESTING", "true")

from membership_billing.models.database import Base  # noqa: E402
from membership_billing.services import (  # noqa: E402
    event_logger,
    invoice_service,
    invoice_store,
    stripe_handler,
)


PAYMENT_DAY = date(2026, 10, 19)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database with the schema created from model metadata."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def fake_db():
    """Stand-in session handed through to the mocked store."""
    return MagicMock(name="db")


@pytest.fixture
def today(monkeypatch):
    monkeypatch.setattr(invoice_service, "_today", lambda: PAYMENT_DAY)
    return PAYMENT_DAY


@pytest.fixture
def store(monkeypatch):
    """Mocked invoice store: create returns id 1, update affects one row."""
    mocks = SimpleNamespace(
        create=AsyncMock(return_value=SimpleNamespace(id=1, reference="")),
        update=AsyncMock(return_value=1),
        get=AsyncMock(return_value=SimpleNamespace(id=1, reference="FUL1")),
    )
    monkeypatch.setattr(invoice_store, "create_invoice", mocks.create)
    monkeypatch.setattr(invoice_store, "update_invoice", mocks.update)
    monkeypatch.setattr(invoice_store, "get_invoice", mocks.get)
    return mocks


@pytest.fixture
def events(monkeypatch):
    """Every event log function replaced by a MagicMock of the same name."""
    mocks = {}
    for name in event_logger.__all__:
        mock = MagicMock(name=name)
        monkeypatch.setattr(event_logger, name, mock)
        mocks[name] = mock
    return SimpleNamespace(**mocks)


@pytest.fixture
def gateway(monkeypatch):
    """Mocked Stripe charge returning transaction id ``trans_1``."""
    charge_card = AsyncMock(return_value=SimpleNamespace(id="trans_1"))
    monkeypatch.setattr(stripe_handler, "charge_card", charge_card)
    return charge_card
