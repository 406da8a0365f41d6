"""
Pytest Configuration and Shared Fixtures for Constituency Desk Backend Tests.

This module provides fixtures for all backend tests, supporting:
- A fixed reference "now" so period windows are deterministic
- A request record factory for building synthetic record sets
- In-memory request stores with a controllable clock, optionally holding
  the sample constituents and team members
- A mock asyncpg pool for database helper tests
- An httpx AsyncClient wired to the FastAPI app with the store and clock
  replaced through dependency_overrides

Async tests run under pytest-asyncio (asyncio_mode = "auto" in pyproject.toml).
"""

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import AsyncGenerator, Callable, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
from httpx import ASGITransport, AsyncClient

from backend.core.dependencies import get_reference_now, get_request_store
from backend.main import app
from backend.models import (
    RequestCategory,
    RequestPriority,
    RequestRecord,
    RequestStatus,
)
from backend.services.request_store import InMemoryRequestStore
from backend.services.sample_data import build_sample_constituents, build_sample_team_members


# Wednesday; the week started Monday 2026-10-12
REFERENCE_NOW = datetime(2026, 10, 14, 15, 30, tzinfo=timezone.utc)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - integration: tests that need a live PostgreSQL database
    """
    config.addinivalue_line(
        'markers',
        'integration: marks tests requiring a live PostgreSQL database'
    )


# ============================================================
# CLOCK FIXTURES
# ============================================================

@pytest.fixture
def reference_now() -> datetime:
    """Fixed reference instant used as `now` by reporting tests."""
    return REFERENCE_NOW


class StepClock:
    """
    Deterministic clock for store tests.

    Each call returns the current value; advance() moves it forward (or
    backward, to simulate clock skew).
    """

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock(REFERENCE_NOW)


# ============================================================
# RECORD FACTORY
# ============================================================

RecordFactory = Callable[..., RequestRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """
    Factory for RequestRecord objects with sensible defaults.

    Ids auto-increment per test. createdAt defaults to one hour before
    REFERENCE_NOW; updatedAt defaults to createdAt.

    Usage:
        def test_something(make_record):
            record = make_record(category=RequestCategory.EMERGENCY,
                                 priority=RequestPriority.HIGH)
    """
    ids = count(1)

    def _make(
        category: RequestCategory = RequestCategory.APPOINTMENT,
        status: RequestStatus = RequestStatus.NEW,
        priority: RequestPriority = RequestPriority.MEDIUM,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        **extra,
    ) -> RequestRecord:
        created = created_at or REFERENCE_NOW - timedelta(hours=1)
        return RequestRecord(
            id=extra.pop('id', next(ids)),
            category=category,
            status=status,
            priority=priority,
            createdAt=created,
            updatedAt=updated_at or created,
            **extra,
        )

    return _make


@pytest.fixture
def ten_records(make_record: RecordFactory) -> List[RequestRecord]:
    """
    Ten records: 4 resolved, 6 pending; 3 emergencies of which 2 are high.
    """
    return [
        make_record(status=RequestStatus.RESOLVED),
        make_record(status=RequestStatus.RESOLVED, category=RequestCategory.INFRASTRUCTURE),
        make_record(status=RequestStatus.RESOLVED, category=RequestCategory.PUBLIC_ISSUE),
        make_record(
            status=RequestStatus.RESOLVED,
            category=RequestCategory.EMERGENCY,
            priority=RequestPriority.HIGH,
        ),
        make_record(status=RequestStatus.NEW),
        make_record(status=RequestStatus.IN_PROGRESS, category=RequestCategory.STARTUP_SUPPORT),
        make_record(status=RequestStatus.UNDER_REVIEW, category=RequestCategory.INFRASTRUCTURE),
        make_record(
            status=RequestStatus.AWAITING_FEEDBACK,
            category=RequestCategory.EMERGENCY,
            priority=RequestPriority.HIGH,
        ),
        make_record(
            status=RequestStatus.NEW,
            category=RequestCategory.EMERGENCY,
            priority=RequestPriority.LOW,
        ),
        make_record(status=RequestStatus.IN_PROGRESS, category=RequestCategory.PUBLIC_ISSUE),
    ]


# ============================================================
# STORE FIXTURES
# ============================================================

@pytest.fixture
def memory_store(step_clock: StepClock) -> InMemoryRequestStore:
    """Empty in-memory store driven by step_clock."""
    return InMemoryRequestStore(clock=step_clock)


@pytest.fixture
def directory_store(step_clock: StepClock) -> InMemoryRequestStore:
    """
    In-memory store holding the nine sample constituents and four team
    members, with no requests yet.
    """
    return InMemoryRequestStore(
        clock=step_clock,
        constituents=build_sample_constituents(),
        team_members=build_sample_team_members(),
    )


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

@pytest.fixture
def mock_db_pool() -> AsyncMock:
    """
    Mock asyncpg pool whose acquire() yields a mock connection.

    The connection is exposed as pool.conn for assertions.
    """
    pool = AsyncMock()

    conn = AsyncMock()
    conn.execute = AsyncMock(return_value="SELECT 0")
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=None)

    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)
    pool.close = AsyncMock(return_value=None)

    pool.conn = conn
    return pool


# ============================================================
# API CLIENT FIXTURES
# ============================================================

@pytest.fixture
async def api_client(
    memory_store: InMemoryRequestStore,
    reference_now: datetime,
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx client for the FastAPI app backed by memory_store at reference_now.

    The lifespan does not run under ASGITransport, so the store and clock
    come only from the overrides.
    """
    app.dependency_overrides[get_request_store] = lambda: memory_store
    app.dependency_overrides[get_reference_now] = lambda: reference_now

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as client:
        yield client

    app.dependency_overrides.clear()
