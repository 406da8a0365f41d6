"""
FastAPI router module for dashboard statistics.

Thin HTTP layer over backend.services.reporting: each endpoint loads the
full record set from the request store, then hands it to the pure engine
together with the requested period and the reference clock.

Key Endpoints:
- GET /api/stats - Summary snapshot with period-over-period change
- GET /api/stats/categories - Category breakdown (always five entries)
- GET /api/stats/statuses - Status breakdown (always five entries)

All endpoints accept an optional `timePeriod` query parameter (all, today,
this-week, this-month, last-quarter, this-year). Unrecognized values are
not rejected; they produce the same result as 'all'.

Dependencies:
- backend/core/dependencies.py: RequestStoreDep, ReferenceNowDep
- backend/services/reporting.py: compute_summary and the breakdowns
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from backend.core.dependencies import ReferenceNowDep, RequestStoreDep
from backend.models.schemas import (
    CategoryBreakdownEntry,
    RequestRecord,
    StatusBreakdownEntry,
    SummarySnapshot,
)
from backend.services.reporting import (
    compute_category_breakdown,
    compute_status_breakdown,
    compute_summary,
)
from backend.services.request_store import RequestStore


logger = logging.getLogger(__name__)

router = APIRouter()

TIME_PERIOD_DESCRIPTION = (
    "Reporting window: all, today, this-week, this-month, last-quarter, "
    "this-year. Unrecognized values are treated as 'all'."
)


async def _load_records(store: RequestStore, label: str) -> List[RequestRecord]:
    """Fetch every request, converting store failures into a 500 response."""
    try:
        return await store.list_all_requests()
    except Exception:
        logger.exception(f"Error fetching {label}")
        raise HTTPException(status_code=500, detail=f"Error fetching {label}")


@router.get("", response_model=SummarySnapshot)
async def get_statistics(
    store: RequestStoreDep,
    now: ReferenceNowDep,
    timePeriod: Optional[str] = Query(None, description=TIME_PERIOD_DESCRIPTION),
) -> SummarySnapshot:
    """
    Headline counts for the dashboard stat cards.

    Returns total, pending, completed, emergency and critical emergency
    counts for the window, with whole-percent change against the
    preceding window of the same length (0 for 'all').
    """
    records = await _load_records(store, "statistics")
    snapshot = compute_summary(records, timePeriod, now)
    logger.info(
        f"Computed statistics for period={timePeriod or 'all'}: "
        f"{snapshot.totalCount} requests"
    )
    return snapshot


@router.get("/categories", response_model=List[CategoryBreakdownEntry])
async def get_category_statistics(
    store: RequestStoreDep,
    now: ReferenceNowDep,
    timePeriod: Optional[str] = Query(None, description=TIME_PERIOD_DESCRIPTION),
) -> List[CategoryBreakdownEntry]:
    """Requests per category; each entry's count is published as `value`."""
    records = await _load_records(store, "category statistics")
    return compute_category_breakdown(records, timePeriod, now)


@router.get("/statuses", response_model=List[StatusBreakdownEntry])
async def get_status_statistics(
    store: RequestStoreDep,
    now: ReferenceNowDep,
    timePeriod: Optional[str] = Query(None, description=TIME_PERIOD_DESCRIPTION),
) -> List[StatusBreakdownEntry]:
    """Requests per status, zero-count statuses included."""
    records = await _load_records(store, "status statistics")
    return compute_status_breakdown(records, timePeriod, now)
