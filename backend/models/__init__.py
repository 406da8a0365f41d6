"""
Package initialization file for backend models.

Re-exports all Pydantic schemas and enumerations from schemas.py and enums.py
so other modules can import them from backend.models directly.

Usage:
    from backend.models import (
        RequestCategory,
        RequestRecord,
        SummarySnapshot,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from backend.models.enums import (
    RequestCategory,
    RequestStatus,
    RequestPriority,
    TimePeriod,
    StoreBackend,
)


# =============================================================================
# Schemas
# =============================================================================

from backend.models.schemas import (
    # People
    Constituent,
    ConstituentCreate,
    ConstituentSummary,
    TeamMember,
    TeamMemberCreate,
    TeamMemberSummary,
    # Request records and write models
    RequestRecord,
    RequestCreate,
    RequestUpdate,
    RequestFilters,
    RequestCountResponse,
    # Request activity
    RequestNote,
    RequestNoteCreate,
    CallLog,
    CallLogCreate,
    Appointment,
    AppointmentCreate,
    UpcomingAppointment,
    # Request views
    RequestListItem,
    RequestDetails,
    # Reporting value objects
    SummarySnapshot,
    CategoryBreakdownEntry,
    StatusBreakdownEntry,
)


__all__ = [
    # Enums
    "RequestCategory",
    "RequestStatus",
    "RequestPriority",
    "TimePeriod",
    "StoreBackend",
    # People
    "Constituent",
    "ConstituentCreate",
    "ConstituentSummary",
    "TeamMember",
    "TeamMemberCreate",
    "TeamMemberSummary",
    # Requests
    "RequestRecord",
    "RequestCreate",
    "RequestUpdate",
    "RequestFilters",
    "RequestCountResponse",
    # Activity
    "RequestNote",
    "RequestNoteCreate",
    "CallLog",
    "CallLogCreate",
    "Appointment",
    "AppointmentCreate",
    "UpcomingAppointment",
    # Views
    "RequestListItem",
    "RequestDetails",
    # Reporting
    "SummarySnapshot",
    "CategoryBreakdownEntry",
    "StatusBreakdownEntry",
]
