"""
FastAPI router module for constituent requests.

Key Endpoints:
- GET /api/requests - Request table rows, newest first, with optional filters
- GET /api/requests/count - Count of requests matching the same filters
- GET /api/requests/details/{request_id} - Request with constituent, assignee,
  notes and call logs
- GET /api/requests/{request_id} - Single request
- POST /api/requests - File a new request (starts 'new', auto-assigned)
- PATCH /api/requests/{request_id} - Change status, priority or assignee
- POST /api/requests/{request_id}/notes - Add a note to a request
- POST /api/requests/{request_id}/call-logs - Log a call about a request

Filters (category, status, priority) accept a concrete value or 'all';
an invalid value is answered with 400 "Invalid filter parameters".
`searchTerm` matches the subject, the description or the constituent name.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from backend.core.dependencies import RequestStoreDep
from backend.models.schemas import (
    CallLog,
    CallLogCreate,
    RequestCountResponse,
    RequestCreate,
    RequestDetails,
    RequestFilters,
    RequestListItem,
    RequestNote,
    RequestNoteCreate,
    RequestRecord,
    RequestUpdate,
)
from backend.services.request_store import RequestStore


logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_filters(
    category: str,
    status: str,
    priority: str,
    search_term: Optional[str],
) -> RequestFilters:
    try:
        return RequestFilters(
            category=category,
            status=status,
            priority=priority,
            searchTerm=search_term,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Invalid filter parameters",
                "errors": e.errors(include_url=False, include_context=False),
            },
        )


async def _require_request(store: RequestStore, request_id: int, action: str) -> None:
    """404 when the request does not exist; 500 when the lookup fails."""
    try:
        request = await store.get_request(request_id)
    except Exception:
        logger.exception(f"Error {action} for request {request_id}")
        raise HTTPException(status_code=500, detail=f"Error {action}")

    if request is None:
        raise HTTPException(status_code=404, detail="Request not found")


@router.get("", response_model=List[RequestListItem])
async def list_requests(
    store: RequestStoreDep,
    category: str = Query("all"),
    status: str = Query("all"),
    priority: str = Query("all"),
    searchTerm: Optional[str] = Query(None, max_length=200),
) -> List[RequestListItem]:
    """List requests matching the filters, newest first, with constituent and assignee."""
    filters = _parse_filters(category, status, priority, searchTerm)
    try:
        requests = await store.list_request_summaries(filters)
        logger.info(f"Listed {len(requests)} requests")
        return requests
    except Exception:
        logger.exception("Error fetching requests")
        raise HTTPException(status_code=500, detail="Error fetching requests")


@router.get("/count", response_model=RequestCountResponse)
async def count_requests(
    store: RequestStoreDep,
    category: str = Query("all"),
    status: str = Query("all"),
    priority: str = Query("all"),
    searchTerm: Optional[str] = Query(None, max_length=200),
) -> RequestCountResponse:
    """Number of requests matching the filters."""
    filters = _parse_filters(category, status, priority, searchTerm)
    try:
        return RequestCountResponse(count=await store.count_requests(filters))
    except Exception:
        logger.exception("Error fetching request count")
        raise HTTPException(status_code=500, detail="Error fetching request count")


@router.get("/details/{request_id}", response_model=RequestDetails)
async def get_request_details(request_id: int, store: RequestStoreDep) -> RequestDetails:
    """
    Request detail view: the request with its constituent, assignee, notes
    and call logs, newest activity first.

    Raises:
        HTTPException 404: If the request does not exist.
    """
    try:
        details = await store.get_request_details(request_id)
    except Exception:
        logger.exception(f"Error fetching details for request {request_id}")
        raise HTTPException(status_code=500, detail="Error fetching request details")

    if details is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return details


@router.get("/{request_id}", response_model=RequestRecord)
async def get_request(request_id: int, store: RequestStoreDep) -> RequestRecord:
    """
    Get a single request.

    Raises:
        HTTPException 404: If the request does not exist.
        HTTPException 500: If the store fails.
    """
    try:
        request = await store.get_request(request_id)
    except Exception:
        logger.exception(f"Error fetching request {request_id}")
        raise HTTPException(status_code=500, detail="Error fetching request details")

    if request is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return request


@router.post("", response_model=RequestRecord, status_code=201)
async def create_request(data: RequestCreate, store: RequestStoreDep) -> RequestRecord:
    """File a new request. It starts as 'new' and is assigned by category."""
    try:
        return await store.create_request(data)
    except Exception:
        logger.exception("Error creating request")
        raise HTTPException(status_code=500, detail="Error creating request")


@router.patch("/{request_id}", response_model=RequestRecord)
async def update_request(
    request_id: int,
    data: RequestUpdate,
    store: RequestStoreDep,
) -> RequestRecord:
    """
    Update status, priority or assignee. Any status may follow any other.

    Raises:
        HTTPException 404: If the request does not exist.
    """
    try:
        updated = await store.update_request(request_id, data)
    except Exception:
        logger.exception(f"Error updating request {request_id}")
        raise HTTPException(status_code=500, detail="Error updating request")

    if updated is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return updated


@router.post("/{request_id}/notes", response_model=RequestNote, status_code=201)
async def create_request_note(
    request_id: int,
    data: RequestNoteCreate,
    store: RequestStoreDep,
) -> RequestNote:
    """Add a note to a request. 404 if the request does not exist."""
    await _require_request(store, request_id, "creating note")
    try:
        return await store.create_request_note(request_id, data)
    except Exception:
        logger.exception(f"Error creating note for request {request_id}")
        raise HTTPException(status_code=500, detail="Error creating note")


@router.post("/{request_id}/call-logs", response_model=CallLog, status_code=201)
async def create_call_log(
    request_id: int,
    data: CallLogCreate,
    store: RequestStoreDep,
) -> CallLog:
    await _require_request(store, request_id, "creating call log")
    try:
        return await store.create_call_log(request_id, data)
    except Exception:
        logger.exception(f"Error creating call log for request {request_id}")
        raise HTTPException(status_code=500, detail="Error creating call log")
