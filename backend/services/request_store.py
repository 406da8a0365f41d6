"""
Request store: the record source behind the dashboard and the reporting engine.

Holds the constituency office's case data: constituents, team members,
requests, and the activity attached to a request (notes, call logs,
appointments). The reporting engine only needs list_all_requests(); the
API layer uses the rest.

Two interchangeable backends implement RequestStore:

    - InMemoryRequestStore: dict-backed, used for local development and
      tests, optionally pre-loaded with sample data
    - PostgresRequestStore: asyncpg-backed via backend.core.database, with
      SQL from backend.sql

Both enforce the same write rules:
    - new requests start as 'new' with createdAt == updatedAt
    - new requests are auto-assigned by category (DEFAULT_ASSIGNEES)
    - every update advances updatedAt and never moves it backwards
    - updating an unknown id returns None

The joined views (request list rows, request details, upcoming
appointments) are built on RequestStore itself from the primitive reads,
so both backends share them.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from backend.core.database import (
    execute_command,
    execute_query,
    execute_query_one,
    execute_scalar,
)
from backend.models.enums import RequestCategory
from backend.models.schemas import (
    Appointment,
    AppointmentCreate,
    CallLog,
    CallLogCreate,
    Constituent,
    ConstituentCreate,
    ConstituentSummary,
    RequestCreate,
    RequestDetails,
    RequestFilters,
    RequestListItem,
    RequestNote,
    RequestNoteCreate,
    RequestRecord,
    RequestUpdate,
    TeamMember,
    TeamMemberCreate,
    TeamMemberSummary,
    UpcomingAppointment,
)
from backend.services.reporting import align_to_reference
from backend.sql.activity_queries import (
    APPOINTMENTS_TABLE_DDL,
    CALL_LOGS_TABLE_DDL,
    REQUEST_NOTES_TABLE_DDL,
    get_appointment_insert_query,
    get_appointment_list_query,
    get_call_log_insert_query,
    get_call_logs_query,
    get_request_note_insert_query,
    get_request_notes_query,
)
from backend.sql.directory_queries import (
    CONSTITUENTS_TABLE_DDL,
    TEAM_MEMBERS_TABLE_DDL,
    get_constituent_by_id_query,
    get_constituent_insert_query,
    get_constituent_list_query,
    get_team_member_by_id_query,
    get_team_member_insert_query,
    get_team_member_list_query,
)
from backend.sql.request_queries import (
    REQUESTS_TABLE_DDL,
    get_all_requests_query,
    get_request_by_id_query,
    get_request_count_query,
    get_request_insert_query,
    get_request_list_query,
    get_request_update_query,
)


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

T = TypeVar("T")

# Team member ids that pick up new requests of each category
DEFAULT_ASSIGNEES: Dict[RequestCategory, int] = {
    RequestCategory.APPOINTMENT: 1,      # Administrative Officer
    RequestCategory.EMERGENCY: 2,        # Emergency Coordinator
    RequestCategory.INFRASTRUCTURE: 3,   # Infrastructure Specialist
    RequestCategory.PUBLIC_ISSUE: 4,     # Public Relations Officer
    RequestCategory.STARTUP_SUPPORT: 1,  # Administrative Officer
}

# Fields that may be cleared with an explicit null
NULLABLE_UPDATE_FIELDS = frozenset({"assignedToId"})

# Rows shown in the dashboard's upcoming appointments panel
UPCOMING_APPOINTMENT_LIMIT: int = 5

# Creation order; foreign keys point at earlier tables
SCHEMA_DDL = (
    CONSTITUENTS_TABLE_DDL,
    TEAM_MEMBERS_TABLE_DDL,
    REQUESTS_TABLE_DDL,
    REQUEST_NOTES_TABLE_DDL,
    CALL_LOGS_TABLE_DDL,
    APPOINTMENTS_TABLE_DDL,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def assignee_for_category(category: RequestCategory) -> int:
    """Default assignee for a new request; falls back to the administrative officer."""
    return DEFAULT_ASSIGNEES.get(category, 1)


def _update_changes(data: RequestUpdate) -> Dict[str, Any]:
    """Fields explicitly set on the update, minus nulls for non-nullable fields."""
    return {
        name: value
        for name, value in data.model_dump(exclude_unset=True).items()
        if value is not None or name in NULLABLE_UPDATE_FIELDS
    }


# =============================================================================
# Display Formatting
# =============================================================================


def format_long_date(moment: datetime) -> str:
    """'October 14, 2026'"""
    return f"{moment:%B} {moment.day}, {moment.year}"


def format_short_date(moment: datetime) -> str:
    """'Wed, Oct 14'"""
    return f"{moment:%a}, {moment:%b} {moment.day}"


def format_clock_time(moment: datetime) -> str:
    """'10:30 AM'"""
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def _in_zone_of(moment: datetime, reference: datetime) -> datetime:
    """`moment` as wall-clock time in the zone of `reference`."""
    aligned = align_to_reference(moment, reference)
    if reference.tzinfo is not None:
        return aligned.astimezone(reference.tzinfo)
    return aligned


# =============================================================================
# Store Interface
# =============================================================================


class RequestStore(ABC):
    """Async interface shared by all request store backends."""

    # --- Constituents -------------------------------------------------------

    @abstractmethod
    async def list_constituents(self, search_term: Optional[str] = None) -> List[Constituent]:
        """Constituents by id; search_term matches name, email, phone or district."""

    @abstractmethod
    async def get_constituent(self, constituent_id: int) -> Optional[Constituent]:
        """Single constituent by id, or None."""

    @abstractmethod
    async def create_constituent(self, data: ConstituentCreate) -> Constituent:
        """Register a constituent."""

    # --- Team members -------------------------------------------------------

    @abstractmethod
    async def list_team_members(self) -> List[TeamMember]:
        """Team members by id."""

    @abstractmethod
    async def get_team_member(self, team_member_id: int) -> Optional[TeamMember]:
        """Single team member by id, or None."""

    @abstractmethod
    async def create_team_member(self, data: TeamMemberCreate) -> TeamMember:
        """Add a team member."""

    # --- Requests -----------------------------------------------------------

    @abstractmethod
    async def list_all_requests(self) -> List[RequestRecord]:
        """Every request, oldest first. Input for the reporting engine."""

    @abstractmethod
    async def list_requests(self, filters: Optional[RequestFilters] = None) -> List[RequestRecord]:
        """Requests matching filters, newest first."""

    @abstractmethod
    async def count_requests(self, filters: Optional[RequestFilters] = None) -> int:
        """Number of requests matching filters."""

    @abstractmethod
    async def get_request(self, request_id: int) -> Optional[RequestRecord]:
        """Single request by id, or None."""

    @abstractmethod
    async def create_request(self, data: RequestCreate) -> RequestRecord:
        """File a new request."""

    @abstractmethod
    async def update_request(self, request_id: int, data: RequestUpdate) -> Optional[RequestRecord]:
        """Apply a partial update; None when request_id is unknown."""

    # --- Request activity ---------------------------------------------------

    @abstractmethod
    async def list_request_notes(self, request_id: int) -> List[RequestNote]:
        """Notes on a request, newest first."""

    @abstractmethod
    async def create_request_note(self, request_id: int, data: RequestNoteCreate) -> RequestNote:
        """Attach a note to an existing request, stamped with the store clock."""

    @abstractmethod
    async def list_call_logs(self, request_id: int) -> List[CallLog]:
        """Calls about a request, most recent first."""

    @abstractmethod
    async def create_call_log(self, request_id: int, data: CallLogCreate) -> CallLog:
        """Record a call about an existing request, stamped with the store clock."""

    @abstractmethod
    async def list_appointments(self, scheduled_from: Optional[datetime] = None) -> List[Appointment]:
        """Appointments in schedule order, optionally from scheduled_from onwards."""

    @abstractmethod
    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Schedule an appointment for a request."""

    # --- Lifecycle ----------------------------------------------------------

    async def startup(self) -> None:
        """Acquire backend resources. No-op by default."""

    async def shutdown(self) -> None:
        """Release backend resources. No-op by default."""

    # --- Joined views -------------------------------------------------------

    async def list_request_summaries(
        self,
        filters: Optional[RequestFilters] = None,
    ) -> List[RequestListItem]:
        """
        Request table rows: matching requests, newest first, each with the
        constituent and assignee summaries the table displays.
        """
        requests = await self.list_requests(filters)
        constituents = {c.id: c for c in await self.list_constituents()}
        team = {m.id: m for m in await self.list_team_members()}

        rows: List[RequestListItem] = []
        for request in requests:
            constituent = constituents.get(request.constituentId)
            assignee = team.get(request.assignedToId)
            rows.append(
                RequestListItem(
                    id=request.id,
                    constituent=ConstituentSummary(
                        name=constituent.name,
                        email=constituent.email,
                        avatar=constituent.avatar,
                    ) if constituent else None,
                    category=request.category,
                    subject=request.subject,
                    date=format_long_date(request.createdAt),
                    createdAt=request.createdAt,
                    priority=request.priority,
                    status=request.status,
                    assignedTo=TeamMemberSummary(
                        name=assignee.name,
                        avatar=assignee.avatar,
                    ) if assignee else None,
                )
            )
        return rows

    async def get_request_details(self, request_id: int) -> Optional[RequestDetails]:
        """The request with its constituent, assignee, notes and call logs."""
        request = await self.get_request(request_id)
        if request is None:
            return None

        constituent = None
        if request.constituentId is not None:
            constituent = await self.get_constituent(request.constituentId)

        assignee = None
        if request.assignedToId is not None:
            assignee = await self.get_team_member(request.assignedToId)

        return RequestDetails(
            **request.model_dump(),
            constituent=constituent,
            assignedTo=assignee,
            notes=await self.list_request_notes(request_id),
            callLogs=await self.list_call_logs(request_id),
        )

    async def upcoming_appointments(
        self,
        now: datetime,
        limit: int = UPCOMING_APPOINTMENT_LIMIT,
    ) -> List[UpcomingAppointment]:
        """
        The next `limit` appointments scheduled from the start of today.

        Display strings and isToday use the calendar of `now`. Appointments
        whose request or constituent no longer resolves are skipped.
        """
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        upcoming: List[UpcomingAppointment] = []

        for appointment in await self.list_appointments(scheduled_from=today_start):
            request = await self.get_request(appointment.requestId)
            if request is None or request.constituentId is None:
                continue
            constituent = await self.get_constituent(request.constituentId)
            if constituent is None:
                continue

            local = _in_zone_of(appointment.scheduledDate, now)
            upcoming.append(
                UpcomingAppointment(
                    id=appointment.id,
                    requestId=request.id,
                    constituentId=constituent.id,
                    constituent=ConstituentSummary(
                        name=constituent.name,
                        email=constituent.email,
                        avatar=constituent.avatar,
                    ),
                    subject=request.subject,
                    scheduledDate=appointment.scheduledDate,
                    date=format_short_date(local),
                    time=format_clock_time(local),
                    isToday=local.date() == now.date(),
                )
            )
            if len(upcoming) >= limit:
                break

        return upcoming


# =============================================================================
# In-Memory Backend
# =============================================================================


def _matches(record: RequestRecord, filters: RequestFilters, constituent_names: Dict[int, str]) -> bool:
    if filters.category != "all" and record.category != filters.category:
        return False
    if filters.status != "all" and record.status != filters.status:
        return False
    if filters.priority != "all" and record.priority != filters.priority:
        return False
    if filters.searchTerm:
        term = filters.searchTerm.lower()
        name = constituent_names.get(record.constituentId, "")
        if not any(term in text.lower() for text in (record.subject, record.description, name)):
            return False
    return True


def _index(items: Optional[Iterable[T]], kind: str) -> Dict[int, T]:
    """Key preloaded models by id, rejecting duplicates."""
    indexed: Dict[int, T] = {}
    for item in items or []:
        if item.id in indexed:
            raise ValueError(f"Duplicate {kind} id {item.id}")
        indexed[item.id] = item
    return indexed


def _next_id(items: Dict[int, Any]) -> int:
    return max(items, default=0) + 1


class InMemoryRequestStore(RequestStore):
    """
    Dict-backed request store.

    Stored models are replaced, never mutated, so lists handed to callers
    stay consistent snapshots. Writers are serialized by an asyncio.Lock.

    Args:
        records: Initial requests (e.g. sample data). Ids must be unique.
        clock: Source of mutation timestamps; defaults to UTC now.
        constituents: Initial constituents.
        team_members: Initial team members.
        appointments: Initial appointments.
    """

    def __init__(
        self,
        records: Optional[Iterable[RequestRecord]] = None,
        clock: Clock = utc_now,
        *,
        constituents: Optional[Iterable[Constituent]] = None,
        team_members: Optional[Iterable[TeamMember]] = None,
        appointments: Optional[Iterable[Appointment]] = None,
    ) -> None:
        self._records: Dict[int, RequestRecord] = _index(records, "request")
        self._constituents: Dict[int, Constituent] = _index(constituents, "constituent")
        self._team: Dict[int, TeamMember] = _index(team_members, "team member")
        self._appointments: Dict[int, Appointment] = _index(appointments, "appointment")
        self._notes: Dict[int, RequestNote] = {}
        self._call_logs: Dict[int, CallLog] = {}
        self._clock = clock
        self._lock = asyncio.Lock()

    # --- Constituents -------------------------------------------------------

    async def list_constituents(self, search_term: Optional[str] = None) -> List[Constituent]:
        constituents = sorted(self._constituents.values(), key=lambda c: c.id)
        if not search_term:
            return constituents

        term = search_term.lower()
        return [
            c for c in constituents
            if any(term in (text or "").lower() for text in (c.name, c.email, c.phone, c.district))
        ]

    async def get_constituent(self, constituent_id: int) -> Optional[Constituent]:
        return self._constituents.get(constituent_id)

    async def create_constituent(self, data: ConstituentCreate) -> Constituent:
        async with self._lock:
            constituent = Constituent(id=_next_id(self._constituents), **data.model_dump())
            self._constituents[constituent.id] = constituent
        return constituent

    # --- Team members -------------------------------------------------------

    async def list_team_members(self) -> List[TeamMember]:
        return sorted(self._team.values(), key=lambda m: m.id)

    async def get_team_member(self, team_member_id: int) -> Optional[TeamMember]:
        return self._team.get(team_member_id)

    async def create_team_member(self, data: TeamMemberCreate) -> TeamMember:
        async with self._lock:
            member = TeamMember(id=_next_id(self._team), **data.model_dump())
            self._team[member.id] = member
        return member

    # --- Requests -----------------------------------------------------------

    async def list_all_requests(self) -> List[RequestRecord]:
        return sorted(self._records.values(), key=lambda r: (r.createdAt, r.id))

    async def list_requests(self, filters: Optional[RequestFilters] = None) -> List[RequestRecord]:
        filters = filters or RequestFilters()
        names = {c.id: c.name for c in self._constituents.values()}
        matched = [r for r in self._records.values() if _matches(r, filters, names)]
        return sorted(matched, key=lambda r: (r.createdAt, r.id), reverse=True)

    async def count_requests(self, filters: Optional[RequestFilters] = None) -> int:
        return len(await self.list_requests(filters))

    async def get_request(self, request_id: int) -> Optional[RequestRecord]:
        return self._records.get(request_id)

    async def create_request(self, data: RequestCreate) -> RequestRecord:
        async with self._lock:
            now = self._clock()
            record = RequestRecord(
                id=_next_id(self._records),
                constituentId=data.constituentId,
                category=data.category,
                subject=data.subject,
                description=data.description,
                priority=data.priority,
                assignedToId=assignee_for_category(data.category),
                location=data.location,
                attachments=list(data.attachments),
                createdAt=now,
                updatedAt=now,
            )
            self._records[record.id] = record

        logger.info(f"Created request {record.id} ({record.category.value})")
        return record

    async def update_request(self, request_id: int, data: RequestUpdate) -> Optional[RequestRecord]:
        async with self._lock:
            existing = self._records.get(request_id)
            if existing is None:
                return None

            changes = _update_changes(data)
            changes["updatedAt"] = max(self._clock(), existing.updatedAt)
            updated = existing.model_copy(update=changes)
            self._records[request_id] = updated

        logger.info(f"Updated request {request_id}: {sorted(changes)}")
        return updated

    # --- Request activity ---------------------------------------------------

    async def list_request_notes(self, request_id: int) -> List[RequestNote]:
        notes = [n for n in self._notes.values() if n.requestId == request_id]
        return sorted(notes, key=lambda n: (n.createdAt, n.id), reverse=True)

    async def create_request_note(self, request_id: int, data: RequestNoteCreate) -> RequestNote:
        async with self._lock:
            note = RequestNote(
                id=_next_id(self._notes),
                requestId=request_id,
                teamMemberId=data.teamMemberId,
                text=data.text,
                createdAt=self._clock(),
            )
            self._notes[note.id] = note

        logger.info(f"Added note {note.id} to request {request_id}")
        return note

    async def list_call_logs(self, request_id: int) -> List[CallLog]:
        logs = [log for log in self._call_logs.values() if log.requestId == request_id]
        return sorted(logs, key=lambda log: (log.callTime, log.id), reverse=True)

    async def create_call_log(self, request_id: int, data: CallLogCreate) -> CallLog:
        async with self._lock:
            log = CallLog(
                id=_next_id(self._call_logs),
                requestId=request_id,
                teamMemberId=data.teamMemberId,
                outcome=data.outcome,
                notes=data.notes,
                callTime=self._clock(),
            )
            self._call_logs[log.id] = log

        logger.info(f"Logged call {log.id} for request {request_id}: {log.outcome}")
        return log

    async def list_appointments(self, scheduled_from: Optional[datetime] = None) -> List[Appointment]:
        appointments = list(self._appointments.values())
        if scheduled_from is not None:
            appointments = [
                a for a in appointments
                if align_to_reference(a.scheduledDate, scheduled_from) >= scheduled_from
            ]
        return sorted(appointments, key=lambda a: (a.scheduledDate, a.id))

    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        async with self._lock:
            appointment = Appointment(id=_next_id(self._appointments), **data.model_dump())
            self._appointments[appointment.id] = appointment
        return appointment


# =============================================================================
# PostgreSQL Backend
# =============================================================================


def _row_to_record(row: Any) -> RequestRecord:
    """Map a requests-table row (asyncpg.Record or dict) to a RequestRecord."""
    return RequestRecord(
        id=row["id"],
        constituentId=row["constituent_id"],
        category=row["category"],
        subject=row["subject"] or "",
        description=row["description"] or "",
        status=row["status"],
        priority=row["priority"],
        assignedToId=row["assigned_to_id"],
        location=row["location"],
        attachments=list(row["attachments"] or []),
        createdAt=row["created_at"],
        updatedAt=row["updated_at"],
    )


def _row_to_constituent(row: Any) -> Constituent:
    return Constituent(**dict(row))


def _row_to_team_member(row: Any) -> TeamMember:
    return TeamMember(**dict(row))


def _row_to_note(row: Any) -> RequestNote:
    return RequestNote(
        id=row["id"],
        requestId=row["request_id"],
        teamMemberId=row["team_member_id"],
        text=row["text"],
        createdAt=row["created_at"],
    )


def _row_to_call_log(row: Any) -> CallLog:
    return CallLog(
        id=row["id"],
        requestId=row["request_id"],
        teamMemberId=row["team_member_id"],
        outcome=row["outcome"],
        notes=row["notes"],
        callTime=row["call_time"],
    )


def _row_to_appointment(row: Any) -> Appointment:
    return Appointment(
        id=row["id"],
        requestId=row["request_id"],
        scheduledDate=row["scheduled_date"],
        duration=row["duration"],
        location=row["location"],
        isConfirmed=bool(row["is_confirmed"]),
    )


def _filter_params(filters: Optional[RequestFilters]) -> Dict[str, Optional[str]]:
    filters = filters or RequestFilters()

    def _value(choice: Any) -> Optional[str]:
        return None if choice == "all" else choice.value

    return {
        "category": _value(filters.category),
        "status": _value(filters.status),
        "priority": _value(filters.priority),
        "search_term": filters.searchTerm or None,
    }


class PostgresRequestStore(RequestStore):
    """
    Request store backed by the asyncpg pool.

    Database errors propagate to the caller; the API layer turns them into
    500 responses.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    async def startup(self) -> None:
        for ddl in SCHEMA_DDL:
            await execute_command(ddl)
        logger.info("Database schema ready")

    # --- Constituents -------------------------------------------------------

    async def list_constituents(self, search_term: Optional[str] = None) -> List[Constituent]:
        sql, params = get_constituent_list_query(search_term)
        rows = await execute_query(sql, *params)
        return [_row_to_constituent(row) for row in rows]

    async def get_constituent(self, constituent_id: int) -> Optional[Constituent]:
        row = await execute_query_one(get_constituent_by_id_query(), constituent_id)
        return _row_to_constituent(row) if row else None

    async def create_constituent(self, data: ConstituentCreate) -> Constituent:
        row = await execute_query_one(
            get_constituent_insert_query(),
            data.name,
            data.email,
            data.phone,
            data.avatar,
            data.address,
            data.district,
        )
        return _row_to_constituent(row)

    # --- Team members -------------------------------------------------------

    async def list_team_members(self) -> List[TeamMember]:
        rows = await execute_query(get_team_member_list_query())
        return [_row_to_team_member(row) for row in rows]

    async def get_team_member(self, team_member_id: int) -> Optional[TeamMember]:
        row = await execute_query_one(get_team_member_by_id_query(), team_member_id)
        return _row_to_team_member(row) if row else None

    async def create_team_member(self, data: TeamMemberCreate) -> TeamMember:
        row = await execute_query_one(
            get_team_member_insert_query(),
            data.name,
            data.email,
            data.role,
            data.phone,
            data.avatar,
        )
        return _row_to_team_member(row)

    # --- Requests -----------------------------------------------------------

    async def list_all_requests(self) -> List[RequestRecord]:
        rows = await execute_query(get_all_requests_query())
        return [_row_to_record(row) for row in rows]

    async def list_requests(self, filters: Optional[RequestFilters] = None) -> List[RequestRecord]:
        sql, params = get_request_list_query(**_filter_params(filters))
        rows = await execute_query(sql, *params)
        return [_row_to_record(row) for row in rows]

    async def count_requests(self, filters: Optional[RequestFilters] = None) -> int:
        sql, params = get_request_count_query(**_filter_params(filters))
        return int(await execute_scalar(sql, *params) or 0)

    async def get_request(self, request_id: int) -> Optional[RequestRecord]:
        row = await execute_query_one(get_request_by_id_query(), request_id)
        return _row_to_record(row) if row else None

    async def create_request(self, data: RequestCreate) -> RequestRecord:
        row = await execute_query_one(
            get_request_insert_query(),
            data.constituentId,
            data.category.value,
            data.subject,
            data.description,
            data.priority.value,
            assignee_for_category(data.category),
            data.location,
            list(data.attachments),
            self._clock(),
        )
        record = _row_to_record(row)
        logger.info(f"Created request {record.id} ({record.category.value})")
        return record

    async def update_request(self, request_id: int, data: RequestUpdate) -> Optional[RequestRecord]:
        changes = {
            name: value.value if hasattr(value, "value") else value
            for name, value in _update_changes(data).items()
        }
        sql, params = get_request_update_query(request_id, changes, self._clock())
        row = await execute_query_one(sql, *params)
        if row is None:
            return None

        logger.info(f"Updated request {request_id}: {sorted(changes)}")
        return _row_to_record(row)

    # --- Request activity ---------------------------------------------------

    async def list_request_notes(self, request_id: int) -> List[RequestNote]:
        rows = await execute_query(get_request_notes_query(), request_id)
        return [_row_to_note(row) for row in rows]

    async def create_request_note(self, request_id: int, data: RequestNoteCreate) -> RequestNote:
        row = await execute_query_one(
            get_request_note_insert_query(),
            request_id,
            data.teamMemberId,
            data.text,
            self._clock(),
        )
        note = _row_to_note(row)
        logger.info(f"Added note {note.id} to request {request_id}")
        return note

    async def list_call_logs(self, request_id: int) -> List[CallLog]:
        rows = await execute_query(get_call_logs_query(), request_id)
        return [_row_to_call_log(row) for row in rows]

    async def create_call_log(self, request_id: int, data: CallLogCreate) -> CallLog:
        row = await execute_query_one(
            get_call_log_insert_query(),
            request_id,
            data.teamMemberId,
            data.outcome,
            data.notes,
            self._clock(),
        )
        log = _row_to_call_log(row)
        logger.info(f"Logged call {log.id} for request {request_id}: {log.outcome}")
        return log

    async def list_appointments(self, scheduled_from: Optional[datetime] = None) -> List[Appointment]:
        sql, params = get_appointment_list_query(scheduled_from)
        rows = await execute_query(sql, *params)
        return [_row_to_appointment(row) for row in rows]

    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        row = await execute_query_one(
            get_appointment_insert_query(),
            data.requestId,
            data.scheduledDate,
            data.duration,
            data.location,
            data.isConfirmed,
        )
        return _row_to_appointment(row)
