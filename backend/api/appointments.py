"""
FastAPI router module for appointments.

Key Endpoints:
- GET /api/appointments/upcoming - The next appointments from the start of
  today, in schedule order, with display date and time in the reporting
  timezone
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from backend.core.dependencies import ReferenceNowDep, RequestStoreDep
from backend.models.schemas import UpcomingAppointment


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/upcoming", response_model=List[UpcomingAppointment])
async def get_upcoming_appointments(
    store: RequestStoreDep,
    now: ReferenceNowDep,
) -> List[UpcomingAppointment]:
    """Dashboard panel rows; appointments whose request is gone are skipped."""
    try:
        appointments = await store.upcoming_appointments(now)
    except Exception:
        logger.exception("Error fetching upcoming appointments")
        raise HTTPException(status_code=500, detail="Error fetching upcoming appointments")

    logger.info(f"Found {len(appointments)} upcoming appointments")
    return appointments
