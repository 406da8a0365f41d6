"""
Backend API package initialization.

This package contains FastAPI router modules for the Constituency Desk:
- stats: Dashboard statistics (summary, category and status breakdowns)
- requests: Request listing, details, creation, updates, notes and call logs
- constituents: Constituent directory
- team: The minister's staff
- appointments: Upcoming appointments panel
"""

from fastapi import APIRouter

from backend.api.stats import router as stats_router
from backend.api.requests import router as requests_router
from backend.api.constituents import router as constituents_router
from backend.api.team import router as team_router
from backend.api.appointments import router as appointments_router

# Main API router, mounted under /api by backend.main
api_router = APIRouter()

api_router.include_router(stats_router, prefix="/stats", tags=["stats"])
api_router.include_router(requests_router, prefix="/requests", tags=["requests"])
api_router.include_router(constituents_router, prefix="/constituents", tags=["constituents"])
api_router.include_router(team_router, prefix="/team", tags=["team"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])

__all__ = [
    "api_router",
    "stats_router",
    "requests_router",
    "constituents_router",
    "team_router",
    "appointments_router",
]
