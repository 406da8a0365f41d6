"""
Pydantic request/response models for the Constituency Desk backend.

This module provides type-safe validation and serialization for the API
contracts: constituents and team members, request records and their write
models, list filters, request activity (notes, call logs, appointments),
the list and detail views of a request, and the value objects produced by
the reporting engine (summary snapshot and the category/status breakdowns).

Field names are camelCase because they are the dashboard's JSON contract.
All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.models.enums import (
    RequestCategory,
    RequestPriority,
    RequestStatus,
)


# =============================================================================
# Constituents and Team Members
# =============================================================================


class ConstituentCreate(BaseModel):
    """Contact details for a person who files requests."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    phone: str = Field(..., min_length=1, max_length=40)
    avatar: Optional[str] = Field(default=None, description="Avatar image URL")
    address: Optional[str] = None
    district: Optional[str] = None


class Constituent(ConstituentCreate):
    """A stored constituent."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Venkateshwarlu Reddy",
                "email": "venkateshwarlu.r@example.com",
                "phone": "+91 98765 43210",
                "avatar": None,
                "address": "24 Main Road, Mangalagiri, Guntur, Andhra Pradesh 522503",
                "district": "Mangalagiri",
            }
        }
    )

    id: int


class ConstituentSummary(BaseModel):
    """Constituent fields shown next to a request in lists."""
    name: str
    email: str
    avatar: Optional[str] = None


class TeamMemberCreate(BaseModel):
    """A member of the minister's staff."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    role: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=40)
    avatar: Optional[str] = None


class TeamMember(TeamMemberCreate):
    id: int


class TeamMemberSummary(BaseModel):
    """Assignee fields shown next to a request in lists."""
    name: str
    avatar: Optional[str] = None


# =============================================================================
# Request Records
# =============================================================================


class RequestRecord(BaseModel):
    """
    A constituent-filed case as held by the request store.

    The reporting engine only reads id, category, status, priority and
    createdAt; the remaining fields are carried for the dashboard.

    Invariant: updatedAt is never earlier than createdAt.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 12,
                "constituentId": 3,
                "category": "infrastructure",
                "subject": "Broken street lights on Main Road",
                "description": "Four lights out near the bus stand since last week.",
                "status": "in-progress",
                "priority": "medium",
                "assignedToId": 3,
                "location": "Main Road, Mangalagiri",
                "attachments": [],
                "createdAt": "2026-10-12T09:30:00Z",
                "updatedAt": "2026-10-14T16:05:00Z",
            }
        }
    )

    id: int = Field(..., description="Unique request identifier")
    constituentId: Optional[int] = Field(
        default=None,
        description="Constituent who filed the request",
    )
    category: RequestCategory = Field(..., description="Request category")
    subject: str = Field(default="", description="One-line summary")
    description: str = Field(default="", description="Full request text")
    status: RequestStatus = Field(
        default=RequestStatus.NEW,
        description="Current workflow status",
    )
    priority: RequestPriority = Field(..., description="Triage priority")
    assignedToId: Optional[int] = Field(
        default=None,
        description="Team member handling the request",
    )
    location: Optional[str] = Field(default=None, description="Where the issue is")
    attachments: List[str] = Field(
        default_factory=list,
        description="Attachment URLs",
    )
    createdAt: datetime = Field(..., description="Creation timestamp, immutable")
    updatedAt: datetime = Field(..., description="Last mutation timestamp")

    @model_validator(mode="after")
    def _check_timestamps(self) -> "RequestRecord":
        if (self.createdAt.tzinfo is None) != (self.updatedAt.tzinfo is None):
            raise ValueError("createdAt and updatedAt must both carry a timezone or neither")
        if self.updatedAt < self.createdAt:
            raise ValueError("updatedAt must not be earlier than createdAt")
        return self


class RequestCreate(BaseModel):
    """
    Payload for filing a new request.

    Status, assignee and timestamps are set by the store: new requests
    always start as 'new' and are auto-assigned by category.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    constituentId: Optional[int] = Field(default=None)
    category: RequestCategory
    subject: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    priority: RequestPriority
    location: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)


class RequestUpdate(BaseModel):
    """Partial update applied by staff (status change, re-prioritize, assign)."""
    status: Optional[RequestStatus] = None
    priority: Optional[RequestPriority] = None
    assignedToId: Optional[int] = None


class RequestFilters(BaseModel):
    """
    List filters for the request table.

    Each dimension accepts a concrete value or 'all'. searchTerm matches
    the subject, the description or the constituent's name,
    case-insensitively.
    """
    category: Union[RequestCategory, Literal["all"]] = "all"
    status: Union[RequestStatus, Literal["all"]] = "all"
    priority: Union[RequestPriority, Literal["all"]] = "all"
    searchTerm: Optional[str] = None


class RequestCountResponse(BaseModel):
    """Response for GET /api/requests/count."""
    count: int = Field(..., ge=0)


# =============================================================================
# Request Activity (notes, call logs, appointments)
# =============================================================================


class RequestNoteCreate(BaseModel):
    """Body of POST /api/requests/{id}/notes."""
    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1)
    teamMemberId: Optional[int] = None


class RequestNote(BaseModel):
    id: int
    requestId: int
    teamMemberId: Optional[int] = None
    text: str
    createdAt: datetime


class CallLogCreate(BaseModel):
    """Body of POST /api/requests/{id}/call-logs."""
    model_config = ConfigDict(str_strip_whitespace=True)

    outcome: str = Field(..., min_length=1, max_length=200)
    notes: Optional[str] = None
    teamMemberId: Optional[int] = None


class CallLog(BaseModel):
    """A phone call made to the constituent about a request."""
    id: int
    requestId: int
    teamMemberId: Optional[int] = None
    outcome: str
    notes: Optional[str] = None
    callTime: datetime


class AppointmentCreate(BaseModel):
    """Schedules a meeting for an appointment request."""
    requestId: int
    scheduledDate: datetime
    duration: int = Field(..., gt=0, description="Length in minutes")
    location: Optional[str] = None
    isConfirmed: bool = False


class Appointment(AppointmentCreate):
    id: int


class UpcomingAppointment(BaseModel):
    """
    One row of the dashboard's upcoming appointments panel.

    date and time are display strings ("Wed, Oct 14" and "10:30 AM") in
    the reporting timezone; scheduledDate carries the exact instant.
    """
    id: int
    requestId: int
    constituentId: int
    constituent: ConstituentSummary
    subject: str
    scheduledDate: datetime
    date: str
    time: str
    isToday: bool


# =============================================================================
# Request Views
# =============================================================================


class RequestListItem(BaseModel):
    """
    Row of the request table: the request with constituent and assignee
    summaries. date is the display form of createdAt ("October 14, 2026").
    """
    id: int
    constituent: Optional[ConstituentSummary] = None
    category: RequestCategory
    subject: str
    date: str
    createdAt: datetime
    priority: RequestPriority
    status: RequestStatus
    assignedTo: Optional[TeamMemberSummary] = None


class RequestDetails(RequestRecord):
    """A request with its constituent, assignee, notes and call logs (newest first)."""
    constituent: Optional[Constituent] = None
    assignedTo: Optional[TeamMember] = None
    notes: List[RequestNote] = Field(default_factory=list)
    callLogs: List[CallLog] = Field(default_factory=list)


# =============================================================================
# Reporting Value Objects
# =============================================================================


class SummarySnapshot(BaseModel):
    """
    Headline counts for the current reporting window.

    The *ChangePct fields compare the current window with the immediately
    preceding window of the same nominal length, as whole percentages.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "totalCount": 10,
                "totalChangePct": 100,
                "pendingCount": 6,
                "pendingChangePct": 20,
                "completedCount": 4,
                "completedChangePct": -33,
                "emergencyCount": 2,
                "criticalEmergencyCount": 1,
            }
        }
    )

    totalCount: int = Field(..., ge=0)
    totalChangePct: int
    pendingCount: int = Field(..., ge=0)
    pendingChangePct: int
    completedCount: int = Field(..., ge=0)
    completedChangePct: int
    emergencyCount: int = Field(..., ge=0)
    criticalEmergencyCount: int = Field(..., ge=0)


class CategoryBreakdownEntry(BaseModel):
    """
    One slice of the category distribution chart.

    The count is published under the JSON key 'value', which is what the
    dashboard's pie chart reads; in Python it is the `count` attribute.
    """
    model_config = ConfigDict(populate_by_name=True)

    key: RequestCategory
    name: str
    count: int = Field(..., ge=0, alias="value")
    percentage: int = Field(..., ge=0)
    color: str


class StatusBreakdownEntry(BaseModel):
    """One bar of the status distribution chart. Zero-count statuses are kept."""
    key: RequestStatus
    name: str
    count: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0)
    color: str
