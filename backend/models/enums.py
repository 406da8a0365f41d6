"""
Enumeration definitions for the Constituency Desk backend.

All enums inherit from both `str` and `Enum` so they serialize to their wire
values in Pydantic models and JSON responses, and compare equal to the plain
strings stored in the database.

Declaration order matters for RequestCategory and RequestStatus: the
reporting engine emits breakdown entries in exactly this order.
"""

from enum import Enum


class RequestCategory(str, Enum):
    """
    Kind of help a constituent is asking for.

    - appointment: Meeting request with the minister or office staff
    - startup-support: Assistance for a new business or startup
    - infrastructure: Roads, water, power and similar civic works
    - public-issue: General grievance affecting the public
    - emergency: Urgent situation needing immediate coordination
    """
    APPOINTMENT = "appointment"
    STARTUP_SUPPORT = "startup-support"
    INFRASTRUCTURE = "infrastructure"
    PUBLIC_ISSUE = "public-issue"
    EMERGENCY = "emergency"


class RequestStatus(str, Enum):
    """
    Workflow label for a request.

    Staff move requests between statuses freely; any status is reachable
    from any other. Only RESOLVED counts as completed in statistics, every
    other value counts as pending.
    """
    NEW = "new"
    IN_PROGRESS = "in-progress"
    UNDER_REVIEW = "under-review"
    AWAITING_FEEDBACK = "awaiting-feedback"
    RESOLVED = "resolved"


class RequestPriority(str, Enum):
    """Triage priority. HIGH on an emergency makes it a critical emergency."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TimePeriod(str, Enum):
    """
    Named reporting windows accepted by the statistics endpoints.

    - all: No date filter and no previous-period comparison
    - today: Since midnight, compared with yesterday
    - this-week: Since Monday midnight, compared with the prior week
    - this-month: Since the 1st, compared with the prior calendar month
    - last-quarter: Since the first day of the current calendar quarter,
      compared with the quarter before it (quarter-to-date, despite the name)
    - this-year: Since January 1, compared with the prior calendar year
    """
    ALL = "all"
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    LAST_QUARTER = "last-quarter"
    THIS_YEAR = "this-year"


class StoreBackend(str, Enum):
    """Request store implementations selectable through settings."""
    MEMORY = "memory"
    POSTGRES = "postgres"
