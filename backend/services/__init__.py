"""
Backend Services Module

Business logic for the Constituency Desk backend.

Services:
- reporting: Pure statistics engine (period windows, summary, breakdowns)
- request_store: Store interface with in-memory and PostgreSQL backends for
  constituents, team members, requests and request activity
- sample_data: Deterministic sample data for local development

The reporting engine is stateless and takes its records as a parameter;
the API layer (backend/api/) fetches records from the store and passes them in.
"""

# =============================================================================
# Reporting Engine Exports
# =============================================================================

from backend.services.reporting import (
    CATEGORY_DISPLAY,
    STATUS_DISPLAY,
    PeriodWindow,
    align_to_reference,
    compute_category_breakdown,
    compute_status_breakdown,
    compute_summary,
    parse_period,
    percentage_change,
    resolve_period_window,
    share_percentage,
    split_by_window,
)

# =============================================================================
# Request Store Exports
# =============================================================================

from backend.services.request_store import (
    DEFAULT_ASSIGNEES,
    UPCOMING_APPOINTMENT_LIMIT,
    InMemoryRequestStore,
    PostgresRequestStore,
    RequestStore,
    assignee_for_category,
)

from backend.services.sample_data import (
    build_sample_appointments,
    build_sample_constituents,
    build_sample_requests,
    build_sample_team_members,
)


__all__ = [
    # Reporting
    "CATEGORY_DISPLAY",
    "STATUS_DISPLAY",
    "PeriodWindow",
    "align_to_reference",
    "compute_category_breakdown",
    "compute_status_breakdown",
    "compute_summary",
    "parse_period",
    "percentage_change",
    "resolve_period_window",
    "share_percentage",
    "split_by_window",
    # Request store
    "DEFAULT_ASSIGNEES",
    "UPCOMING_APPOINTMENT_LIMIT",
    "InMemoryRequestStore",
    "PostgresRequestStore",
    "RequestStore",
    "assignee_for_category",
    # Sample data
    "build_sample_appointments",
    "build_sample_constituents",
    "build_sample_requests",
    "build_sample_team_members",
]
