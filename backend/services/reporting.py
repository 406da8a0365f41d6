"""
Reporting engine for the minister's statistics dashboard.

Computes, for a set of request records and a named reporting period:

    - a summary snapshot (total / pending / completed / emergency counts)
      with percentage change against the immediately preceding period
    - a breakdown by category (all five categories, fixed order)
    - a breakdown by status (all five statuses, fixed order)

Every function here is pure: the caller supplies the records and the
reference `now`, nothing is read from shared state and nothing is written.
Window membership is always re-derived from `createdAt`, so callers may
pass either the full record set or any superset of the window.

Window rules:
    A record is in the current window when createdAt >= current_start
    (no upper bound). It is in the previous window when
    previous_start <= createdAt < current_start. Period 'all' and any
    unrecognized token mean no filter and no previous-period comparison.
    A timestamp without tzinfo is read as wall-clock time in the zone of
    `now`; against a naive `now`, aware timestamps are compared by their
    own wall-clock time.

Percentage change rules:
    previous == 0 and current == 0  ->  0
    previous == 0 and current > 0   ->  100
    otherwise                       ->  round((current - previous) / previous * 100)
    Rounding is half away from zero.

Usage:
    from backend.services.reporting import compute_summary

    snapshot = compute_summary(records, "this-month", now=datetime.now(tz))
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, Union

from backend.models.enums import (
    RequestCategory,
    RequestPriority,
    RequestStatus,
    TimePeriod,
)
from backend.models.schemas import (
    CategoryBreakdownEntry,
    RequestRecord,
    StatusBreakdownEntry,
    SummarySnapshot,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Display Lookup Tables
# =============================================================================

# Canonical display name and chart color per category. Iteration order is
# the breakdown output order.
CATEGORY_DISPLAY: Dict[RequestCategory, Tuple[str, str]] = {
    RequestCategory.APPOINTMENT: ("Appointments", "#1a56db"),
    RequestCategory.STARTUP_SUPPORT: ("Startup Support", "#7e3af2"),
    RequestCategory.INFRASTRUCTURE: ("Infrastructure", "#0694a2"),
    RequestCategory.PUBLIC_ISSUE: ("Public Issues", "#ff5a1f"),
    RequestCategory.EMERGENCY: ("Emergency", "#e02424"),
}

STATUS_DISPLAY: Dict[RequestStatus, Tuple[str, str]] = {
    RequestStatus.NEW: ("New", "#9ca3af"),
    RequestStatus.IN_PROGRESS: ("In Progress", "#3b82f6"),
    RequestStatus.UNDER_REVIEW: ("Under Review", "#8b5cf6"),
    RequestStatus.AWAITING_FEEDBACK: ("Awaiting Feedback", "#06b6d4"),
    RequestStatus.RESOLVED: ("Resolved", "#10b981"),
}

# Change reported when a count appears from a zero baseline
NEW_GROWTH_CHANGE_PCT: int = 100


# =============================================================================
# Period Window Resolution
# =============================================================================


@dataclass(frozen=True)
class PeriodWindow:
    """
    Lower bounds of the current and previous reporting windows.

    Attributes:
        period: The resolved period (ALL for unrecognized tokens).
        current_start: Inclusive lower bound of the current window, or None
            when the window is unbounded.
        previous_start: Inclusive lower bound of the previous window, whose
            exclusive upper bound is current_start. None when no comparison
            is defined.
    """
    period: TimePeriod
    current_start: Optional[datetime] = None
    previous_start: Optional[datetime] = None

    @property
    def has_comparison(self) -> bool:
        return self.current_start is not None and self.previous_start is not None


def parse_period(period: Union[str, TimePeriod, None]) -> TimePeriod:
    """
    Map a raw period token to a TimePeriod, degrading to ALL.

    Never raises: None, empty strings and unknown tokens all resolve to ALL.
    """
    if isinstance(period, TimePeriod):
        return period
    if not period:
        return TimePeriod.ALL
    try:
        return TimePeriod(period.strip().lower())
    except ValueError:
        logger.debug(f"Unrecognized period token {period!r}, using 'all'")
        return TimePeriod.ALL


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _shift_months(month_start: datetime, months: int) -> datetime:
    """Move a first-of-month datetime by whole months, wrapping years."""
    index = month_start.year * 12 + (month_start.month - 1) + months
    return month_start.replace(year=index // 12, month=index % 12 + 1)


def resolve_period_window(
    period: Union[str, TimePeriod, None],
    now: datetime,
) -> PeriodWindow:
    """
    Resolve a period token into current and previous window lower bounds.

    Boundaries use the calendar of `now` (its tzinfo is preserved, naive
    datetimes stay naive).

    Args:
        period: Period token such as 'this-week'. Unknown values mean 'all'.
        now: Reference instant.

    Returns:
        PeriodWindow with both bounds None for 'all'.

    Example:
        >>> window = resolve_period_window("this-month", datetime(2026, 1, 15, 10))
        >>> window.current_start, window.previous_start
        (datetime.datetime(2026, 1, 1, 0, 0), datetime.datetime(2025, 12, 1, 0, 0))
    """
    resolved = parse_period(period)
    today = _start_of_day(now)

    if resolved is TimePeriod.TODAY:
        return PeriodWindow(resolved, today, today - timedelta(days=1))

    if resolved is TimePeriod.THIS_WEEK:
        # weekday(): Monday == 0, so Sunday goes back 6 days
        week_start = today - timedelta(days=now.weekday())
        return PeriodWindow(resolved, week_start, week_start - timedelta(days=7))

    if resolved is TimePeriod.THIS_MONTH:
        month_start = today.replace(day=1)
        return PeriodWindow(resolved, month_start, _shift_months(month_start, -1))

    if resolved is TimePeriod.LAST_QUARTER:
        # Quarter-to-date of the current calendar quarter
        quarter_month = 3 * ((now.month - 1) // 3) + 1
        quarter_start = today.replace(month=quarter_month, day=1)
        return PeriodWindow(resolved, quarter_start, _shift_months(quarter_start, -3))

    if resolved is TimePeriod.THIS_YEAR:
        year_start = today.replace(month=1, day=1)
        return PeriodWindow(resolved, year_start, year_start.replace(year=year_start.year - 1))

    return PeriodWindow(TimePeriod.ALL)


def align_to_reference(moment: datetime, reference: datetime) -> datetime:
    """
    Make `moment` comparable with `reference`.

    Naive moments take the reference's tzinfo; against a naive reference,
    aware moments drop theirs. Otherwise `moment` is returned unchanged.

    Example:
        >>> align_to_reference(datetime(2026, 10, 1, 9), datetime(2026, 10, 15, tzinfo=timezone.utc))
        datetime.datetime(2026, 10, 1, 9, 0, tzinfo=datetime.timezone.utc)
    """
    if reference.tzinfo is None:
        return moment.replace(tzinfo=None) if moment.tzinfo is not None else moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment


def split_by_window(
    records: Iterable[RequestRecord],
    window: PeriodWindow,
) -> Tuple[List[RequestRecord], List[RequestRecord]]:
    """
    Partition records into (current, previous) window members.

    Records older than previous_start belong to neither list. createdAt
    values are aligned to the window's tzinfo before comparing, so naive
    and aware records can be mixed.
    """
    current: List[RequestRecord] = []
    previous: List[RequestRecord] = []

    for record in records:
        if window.current_start is None:
            current.append(record)
            continue

        created = align_to_reference(record.createdAt, window.current_start)
        if created >= window.current_start:
            current.append(record)
        elif window.previous_start is not None and created >= window.previous_start:
            previous.append(record)

    return current, previous


# =============================================================================
# Arithmetic Helpers
# =============================================================================


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def percentage_change(current: int, previous: int) -> int:
    """
    Whole-percent change from previous to current.

    A zero baseline never divides: 0 -> 0 is no change, 0 -> n is 100.

    Example:
        >>> percentage_change(10, 5)
        100
        >>> percentage_change(2, 3)
        -33
    """
    if previous == 0:
        return 0 if current == 0 else NEW_GROWTH_CHANGE_PCT
    return round_half_away_from_zero((current - previous) / previous * 100)


def share_percentage(count: int, total: int) -> int:
    """Whole-percent share of total, 0 when total is 0."""
    if total == 0:
        return 0
    return round_half_away_from_zero(count / total * 100)


# =============================================================================
# Summary
# =============================================================================


def _count_pending(records: List[RequestRecord]) -> int:
    return sum(1 for r in records if r.status != RequestStatus.RESOLVED)


def _count_completed(records: List[RequestRecord]) -> int:
    return sum(1 for r in records if r.status == RequestStatus.RESOLVED)


def compute_summary(
    records: Iterable[RequestRecord],
    period: Union[str, TimePeriod, None],
    now: datetime,
) -> SummarySnapshot:
    """
    Compute the headline snapshot for the current window.

    Args:
        records: Request records (any superset of the window).
        period: Period token; unrecognized tokens behave like 'all'.
        now: Reference instant for window resolution.

    Returns:
        SummarySnapshot. For 'all' there is no previous window and every
        change percentage is 0.
    """
    window = resolve_period_window(period, now)
    current, previous = split_by_window(records, window)

    total = len(current)
    pending = _count_pending(current)
    completed = _count_completed(current)
    emergencies = [r for r in current if r.category == RequestCategory.EMERGENCY]
    critical = sum(1 for r in emergencies if r.priority == RequestPriority.HIGH)

    if window.has_comparison:
        total_change = percentage_change(total, len(previous))
        pending_change = percentage_change(pending, _count_pending(previous))
        completed_change = percentage_change(completed, _count_completed(previous))
    else:
        total_change = pending_change = completed_change = 0

    return SummarySnapshot(
        totalCount=total,
        totalChangePct=total_change,
        pendingCount=pending,
        pendingChangePct=pending_change,
        completedCount=completed,
        completedChangePct=completed_change,
        emergencyCount=len(emergencies),
        criticalEmergencyCount=critical,
    )


# =============================================================================
# Breakdowns
# =============================================================================


def compute_category_breakdown(
    records: Iterable[RequestRecord],
    period: Union[str, TimePeriod, None],
    now: datetime,
) -> List[CategoryBreakdownEntry]:
    """
    Distribute current-window records over the five categories.

    All categories are always present, in CATEGORY_DISPLAY order.
    Percentages are rounded independently and may not sum to 100.
    """
    window = resolve_period_window(period, now)
    current, _ = split_by_window(records, window)
    counts = Counter(r.category for r in current)
    total = len(current)

    return [
        CategoryBreakdownEntry(
            key=category,
            name=name,
            count=counts[category],
            percentage=share_percentage(counts[category], total),
            color=color,
        )
        for category, (name, color) in CATEGORY_DISPLAY.items()
    ]


def compute_status_breakdown(
    records: Iterable[RequestRecord],
    period: Union[str, TimePeriod, None],
    now: datetime,
) -> List[StatusBreakdownEntry]:
    """
    Distribute current-window records over the five statuses.

    Zero-count statuses are kept so charts render empty bars.
    """
    window = resolve_period_window(period, now)
    current, _ = split_by_window(records, window)
    counts = Counter(r.status for r in current)
    total = len(current)

    return [
        StatusBreakdownEntry(
            key=status,
            name=name,
            count=counts[status],
            percentage=share_percentage(counts[status], total),
            color=color,
        )
        for status, (name, color) in STATUS_DISPLAY.items()
    ]
