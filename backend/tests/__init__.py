'''
Constituency Desk Backend Test Suite

Test Modules:
-------------
- test_reporting.py: Reporting engine tests
  - Period parsing and window resolution (today, this-week, this-month,
    last-quarter, this-year, all)
  - Current/previous window split with half-open boundaries
  - Percentage change rounding and the zero-baseline rule
  - Summary snapshot and category/status breakdowns
  - Naive and timezone-aware timestamps in one batch

- test_request_store.py: Request store tests
  - updatedAt >= createdAt on every record
  - In-memory create/update/list/count with filters
  - Constituents, team members, notes, call logs and appointments
  - Request list rows, request details and upcoming appointments
  - Sample data determinism
  - PostgreSQL store against mocked query helpers, SQL builders

- test_core.py: Settings validation and asyncpg pool helpers

- test_api.py: Contract tests for /api/stats*, /api/requests*,
  /api/constituents*, /api/team* and /api/appointments/upcoming

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Test Dependencies:
------------------
- pytest
- pytest-asyncio (asyncio_mode = "auto")
- httpx (ASGITransport client for the FastAPI app)

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
