"""
FastAPI dependency injection module for the Constituency Desk backend.

Provides reusable dependencies so endpoint handlers never reach into
global state directly:

- get_settings_dependency / SettingsDep: the cached Settings singleton
- get_request_store / RequestStoreDep: the store created in the app lifespan
- get_reference_now / ReferenceNowDep: "now" in the reporting timezone

Tests replace the store and the clock with app.dependency_overrides, which
makes statistics endpoints deterministic:

    app.dependency_overrides[get_request_store] = lambda: store
    app.dependency_overrides[get_reference_now] = lambda: fixed_now

Usage:
    @router.get("/stats")
    async def get_stats(store: RequestStoreDep, now: ReferenceNowDep):
        records = await store.list_all_requests()
        return compute_summary(records, "all", now)
"""

from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from backend.core.config import Settings, get_settings
from backend.services.request_store import RequestStore


# =============================================================================
# Settings
# =============================================================================

def get_settings_dependency() -> Settings:
    """FastAPI dependency returning the cached Settings instance."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Request Store
# =============================================================================

def get_request_store(request: Request) -> RequestStore:
    """
    Return the request store attached to the application in its lifespan.

    Raises:
        HTTPException 503: If the application started without a store.
    """
    store = getattr(request.app.state, "request_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Request store is not available")
    return store


RequestStoreDep = Annotated[RequestStore, Depends(get_request_store)]


# =============================================================================
# Reference Clock
# =============================================================================

def get_reference_now(settings: SettingsDep) -> datetime:
    """Current time in the reporting timezone; calendar windows follow this zone."""
    return datetime.now(settings.reporting_tz)


ReferenceNowDep = Annotated[datetime, Depends(get_reference_now)]
