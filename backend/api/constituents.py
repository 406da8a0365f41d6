"""
FastAPI router module for constituents.

Key Endpoints:
- GET /api/constituents - Constituents by id; `search` matches name, email,
  phone or district
- GET /api/constituents/{constituent_id} - Single constituent
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from backend.core.dependencies import RequestStoreDep
from backend.models.schemas import Constituent


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Constituent])
async def list_constituents(
    store: RequestStoreDep,
    search: Optional[str] = Query(None, max_length=200),
) -> List[Constituent]:
    try:
        return await store.list_constituents(search)
    except Exception:
        logger.exception("Error fetching constituents")
        raise HTTPException(status_code=500, detail="Error fetching constituents")


@router.get("/{constituent_id}", response_model=Constituent)
async def get_constituent(constituent_id: int, store: RequestStoreDep) -> Constituent:
    """
    Get a single constituent.

    Raises:
        HTTPException 404: If the constituent does not exist.
    """
    try:
        constituent = await store.get_constituent(constituent_id)
    except Exception:
        logger.exception(f"Error fetching constituent {constituent_id}")
        raise HTTPException(status_code=500, detail="Error fetching constituent")

    if constituent is None:
        raise HTTPException(status_code=404, detail="Constituent not found")
    return constituent
