"""
FastAPI router module for the minister's staff.

Key Endpoints:
- GET /api/team - Team members by id
- GET /api/team/{team_member_id} - Single team member
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from backend.core.dependencies import RequestStoreDep
from backend.models.schemas import TeamMember


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[TeamMember])
async def list_team_members(store: RequestStoreDep) -> List[TeamMember]:
    try:
        return await store.list_team_members()
    except Exception:
        logger.exception("Error fetching team members")
        raise HTTPException(status_code=500, detail="Error fetching team members")


@router.get("/{team_member_id}", response_model=TeamMember)
async def get_team_member(team_member_id: int, store: RequestStoreDep) -> TeamMember:
    try:
        member = await store.get_team_member(team_member_id)
    except Exception:
        logger.exception(f"Error fetching team member {team_member_id}")
        raise HTTPException(status_code=500, detail="Error fetching team member")

    if member is None:
        raise HTTPException(status_code=404, detail="Team member not found")
    return member
