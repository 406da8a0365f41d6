"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings (config)
- Async PostgreSQL connectivity via asyncpg (database)
- FastAPI dependency injection utilities (dependencies)

Configuration and database lifecycle helpers are re-exported here:

    from backend.core import get_settings, init_db, close_db

Dependencies are imported from backend.core.dependencies directly, since
they depend on the service layer, which itself uses backend.core.database.
"""

# =============================================================================
# Re-exports from backend.core.config
# =============================================================================
from backend.core.config import Settings, get_settings

# =============================================================================
# Re-exports from backend.core.database
# =============================================================================
from backend.core.database import init_db, close_db, get_db_pool


__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
]
