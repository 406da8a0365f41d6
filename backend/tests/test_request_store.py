"""
Test suite for the request store backends and SQL builders.

The tests verify:
1. In-memory store write rules: new requests start 'new' with
   createdAt == updatedAt, are auto-assigned by category, and updates
   advance updatedAt without ever moving it backwards
2. Filtering, searching (including by constituent name), counting and ordering
3. Constituents, team members, notes, call logs and appointments, and the
   joined list, detail and upcoming-appointment views
4. Deterministic sample data respecting the timestamp invariant
5. PostgreSQL store mapping and parameters with the database helpers mocked
6. Parameterized SQL generation
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from backend.models import (
    Appointment,
    AppointmentCreate,
    CallLogCreate,
    ConstituentCreate,
    RequestCategory,
    RequestCreate,
    RequestFilters,
    RequestNoteCreate,
    RequestPriority,
    RequestRecord,
    RequestStatus,
    RequestUpdate,
)
from backend.services.request_store import (
    DEFAULT_ASSIGNEES,
    SCHEMA_DDL,
    UPCOMING_APPOINTMENT_LIMIT,
    InMemoryRequestStore,
    PostgresRequestStore,
    assignee_for_category,
)
from backend.services.sample_data import (
    SAMPLE_WINDOW_DAYS,
    build_sample_appointments,
    build_sample_constituents,
    build_sample_requests,
    build_sample_team_members,
)
from backend.sql.activity_queries import get_appointment_list_query
from backend.sql.directory_queries import get_constituent_list_query
from backend.sql.request_queries import (
    get_request_count_query,
    get_request_list_query,
    get_request_update_query,
)


def new_request(**overrides) -> RequestCreate:
    payload = {
        "constituentId": 3,
        "category": RequestCategory.INFRASTRUCTURE,
        "subject": "Broken street lights",
        "description": "Four lights out near the bus stand.",
        "priority": RequestPriority.MEDIUM,
        "location": "Main Road",
    }
    payload.update(overrides)
    return RequestCreate(**payload)


# =============================================================================
# TEST CLASS: RECORD INVARIANT
# =============================================================================


class TestRequestRecordInvariant:

    def test_updated_before_created_is_rejected(self, reference_now: datetime) -> None:
        with pytest.raises(ValidationError):
            RequestRecord(
                id=1,
                category=RequestCategory.APPOINTMENT,
                priority=RequestPriority.LOW,
                createdAt=reference_now,
                updatedAt=reference_now - timedelta(seconds=1),
            )

    def test_mixed_timestamp_awareness_is_rejected(self, reference_now: datetime) -> None:
        with pytest.raises(ValidationError):
            RequestRecord(
                id=1,
                category=RequestCategory.APPOINTMENT,
                priority=RequestPriority.LOW,
                createdAt=datetime(2026, 10, 1, 9),
                updatedAt=reference_now,
            )

    def test_defaults(self, reference_now: datetime) -> None:
        record = RequestRecord(
            id=1,
            category="emergency",
            priority="high",
            createdAt=reference_now,
            updatedAt=reference_now,
        )

        assert record.status is RequestStatus.NEW
        assert record.attachments == []
        assert record.subject == ""


# =============================================================================
# TEST CLASS: IN-MEMORY STORE WRITES
# =============================================================================


class TestInMemoryWrites:

    async def test_create_starts_new_with_equal_timestamps(self, memory_store, step_clock) -> None:
        record = await memory_store.create_request(new_request())

        assert record.id == 1
        assert record.status is RequestStatus.NEW
        assert record.createdAt == record.updatedAt == step_clock.current
        assert record.assignedToId == DEFAULT_ASSIGNEES[RequestCategory.INFRASTRUCTURE]

    async def test_ids_increment(self, memory_store) -> None:
        first = await memory_store.create_request(new_request())
        second = await memory_store.create_request(new_request(category=RequestCategory.EMERGENCY))

        assert (first.id, second.id) == (1, 2)
        assert second.assignedToId == 2

    async def test_ids_continue_after_preloaded_records(self, make_record, step_clock) -> None:
        store = InMemoryRequestStore([make_record(id=7), make_record(id=3)], clock=step_clock)

        created = await store.create_request(new_request())

        assert created.id == 8

    def test_duplicate_preloaded_ids_rejected(self, make_record) -> None:
        with pytest.raises(ValueError):
            InMemoryRequestStore([make_record(id=1), make_record(id=1)])

    async def test_update_advances_updated_at(self, memory_store, step_clock) -> None:
        created = await memory_store.create_request(new_request())
        later = step_clock.advance(hours=2)

        updated = await memory_store.update_request(
            created.id, RequestUpdate(status=RequestStatus.RESOLVED)
        )

        assert updated.status is RequestStatus.RESOLVED
        assert updated.updatedAt == later
        assert updated.createdAt == created.createdAt

    async def test_update_never_moves_updated_at_backwards(self, memory_store, step_clock) -> None:
        created = await memory_store.create_request(new_request())
        step_clock.advance(minutes=-30)

        updated = await memory_store.update_request(
            created.id, RequestUpdate(priority=RequestPriority.HIGH)
        )

        assert updated.updatedAt == created.updatedAt
        assert updated.priority is RequestPriority.HIGH

    async def test_any_status_transition_allowed(self, memory_store) -> None:
        created = await memory_store.create_request(new_request())

        for status in [RequestStatus.RESOLVED, RequestStatus.NEW, RequestStatus.AWAITING_FEEDBACK]:
            updated = await memory_store.update_request(created.id, RequestUpdate(status=status))
            assert updated.status is status

    async def test_explicit_null_clears_assignee_but_not_status(self, memory_store) -> None:
        created = await memory_store.create_request(new_request())

        updated = await memory_store.update_request(
            created.id, RequestUpdate.model_validate({"assignedToId": None, "status": None})
        )

        assert updated.assignedToId is None
        assert updated.status is RequestStatus.NEW

    async def test_update_unknown_id_returns_none(self, memory_store) -> None:
        assert await memory_store.update_request(99, RequestUpdate(status=RequestStatus.RESOLVED)) is None

    async def test_earlier_snapshots_are_not_mutated(self, memory_store) -> None:
        created = await memory_store.create_request(new_request())
        snapshot = await memory_store.list_all_requests()

        await memory_store.update_request(created.id, RequestUpdate(status=RequestStatus.RESOLVED))

        assert snapshot[0].status is RequestStatus.NEW

    def test_assignee_for_category_covers_all_categories(self) -> None:
        assert {c: assignee_for_category(c) for c in RequestCategory} == {
            RequestCategory.APPOINTMENT: 1,
            RequestCategory.STARTUP_SUPPORT: 1,
            RequestCategory.INFRASTRUCTURE: 3,
            RequestCategory.PUBLIC_ISSUE: 4,
            RequestCategory.EMERGENCY: 2,
        }


# =============================================================================
# TEST CLASS: IN-MEMORY STORE READS
# =============================================================================


class TestInMemoryReads:

    @pytest.fixture
    def store(self, make_record, reference_now, step_clock) -> InMemoryRequestStore:
        return InMemoryRequestStore(
            [
                make_record(id=1, category=RequestCategory.EMERGENCY, priority=RequestPriority.HIGH,
                            subject="Flooding in colony", created_at=reference_now - timedelta(days=3)),
                make_record(id=2, category=RequestCategory.INFRASTRUCTURE, status=RequestStatus.RESOLVED,
                            subject="Pothole repair", description="Deep potholes after FLOODING",
                            created_at=reference_now - timedelta(days=1)),
                make_record(id=3, category=RequestCategory.APPOINTMENT,
                            subject="Meeting request", created_at=reference_now - timedelta(days=2)),
            ],
            clock=step_clock,
        )

    async def test_list_all_is_oldest_first(self, store) -> None:
        assert [r.id for r in await store.list_all_requests()] == [1, 3, 2]

    async def test_list_requests_newest_first(self, store) -> None:
        assert [r.id for r in await store.list_requests()] == [2, 3, 1]

    async def test_filter_by_category_status_priority(self, store) -> None:
        assert [r.id for r in await store.list_requests(RequestFilters(category="emergency"))] == [1]
        assert [r.id for r in await store.list_requests(RequestFilters(status="resolved"))] == [2]
        assert [r.id for r in await store.list_requests(RequestFilters(priority="high"))] == [1]

    async def test_search_matches_subject_or_description_case_insensitive(self, store) -> None:
        matched = await store.list_requests(RequestFilters(searchTerm="flood"))

        assert [r.id for r in matched] == [2, 1]

    async def test_count_requests(self, store) -> None:
        assert await store.count_requests() == 3
        assert await store.count_requests(RequestFilters(category="appointment", status="new")) == 1
        assert await store.count_requests(RequestFilters(category="public-issue")) == 0

    async def test_get_request(self, store) -> None:
        assert (await store.get_request(3)).subject == "Meeting request"
        assert await store.get_request(42) is None


# =============================================================================
# TEST CLASS: IN-MEMORY DIRECTORY
# =============================================================================


class TestInMemoryDirectory:

    async def test_list_constituents_by_id(self, directory_store) -> None:
        constituents = await directory_store.list_constituents()

        assert [c.id for c in constituents] == list(range(1, 10))

    @pytest.mark.parametrize("term,expected", [
        ("REDDY", [1]),
        ("tenali", [6]),
        ("ravi.y@", [8]),
        ("+91 65432", [4, 9]),
        ("", list(range(1, 10))),
        ("nobody", []),
    ])
    async def test_search_constituents(self, directory_store, term, expected) -> None:
        assert [c.id for c in await directory_store.list_constituents(term)] == expected

    async def test_create_constituent_takes_next_id(self, directory_store) -> None:
        created = await directory_store.create_constituent(
            ConstituentCreate(name=" Kavitha Rao ", email="kavitha.r@example.com", phone="+91 90000 00001")
        )

        assert created.id == 10
        assert created.name == "Kavitha Rao"
        assert await directory_store.get_constituent(10) == created

    async def test_team_members(self, directory_store) -> None:
        team = await directory_store.list_team_members()

        assert [m.id for m in team] == [1, 2, 3, 4]
        assert (await directory_store.get_team_member(3)).role == "Infrastructure Specialist"
        assert await directory_store.get_team_member(5) is None

    def test_duplicate_constituent_ids_rejected(self) -> None:
        constituents = build_sample_constituents()

        with pytest.raises(ValueError):
            InMemoryRequestStore(constituents=constituents + constituents[:1])

    async def test_search_requests_by_constituent_name(self, directory_store) -> None:
        await directory_store.create_request(new_request(constituentId=2, subject="Pension delay",
                                                         description="Not credited"))
        await directory_store.create_request(new_request(constituentId=5))
        await directory_store.create_request(new_request(constituentId=None, subject="Anonymous tip",
                                                         description="Narasimha temple road"))

        matched = await directory_store.list_requests(RequestFilters(searchTerm="narasimha"))

        assert [r.subject for r in matched] == ["Anonymous tip", "Pension delay"]
        assert await directory_store.count_requests(RequestFilters(searchTerm="konda")) == 1

    async def test_request_summaries_embed_directory(self, directory_store) -> None:
        await directory_store.create_request(new_request(constituentId=5))
        await directory_store.create_request(new_request(constituentId=42))

        rows = await directory_store.list_request_summaries()

        assert [r.id for r in rows] == [2, 1]
        assert rows[0].constituent is None
        assert rows[1].constituent.name == "Srinivasulu Konda"
        assert rows[1].assignedTo.name == "Venkata Subrahmanyam"
        assert rows[1].date == "October 14, 2026"


# =============================================================================
# TEST CLASS: IN-MEMORY ACTIVITY
# =============================================================================


class TestInMemoryActivity:

    async def test_notes_are_per_request_newest_first(self, directory_store, step_clock) -> None:
        await directory_store.create_request(new_request())
        await directory_store.create_request(new_request())
        first = await directory_store.create_request_note(1, RequestNoteCreate(text="Site visit booked"))
        step_clock.advance(hours=1)
        second = await directory_store.create_request_note(1, RequestNoteCreate(text="Contractor informed",
                                                                               teamMemberId=3))
        await directory_store.create_request_note(2, RequestNoteCreate(text="Other request"))

        notes = await directory_store.list_request_notes(1)

        assert notes == [second, first]
        assert first.createdAt == step_clock.current - timedelta(hours=1)
        assert second.teamMemberId == 3

    async def test_call_logs_stamped_with_clock(self, directory_store, step_clock) -> None:
        await directory_store.create_request(new_request())
        step_clock.advance(minutes=5)

        log = await directory_store.create_call_log(1, CallLogCreate(outcome="Left voicemail"))

        assert log.callTime == step_clock.current
        assert await directory_store.list_call_logs(1) == [log]
        assert await directory_store.list_call_logs(2) == []

    async def test_request_details(self, directory_store) -> None:
        await directory_store.create_request(new_request(constituentId=9))
        await directory_store.create_request_note(1, RequestNoteCreate(text="Called the ward office"))

        details = await directory_store.get_request_details(1)

        assert details.subject == "Broken street lights"
        assert details.constituent.name == "Padmavathi Bapatla"
        assert details.assignedTo.name == "Venkata Subrahmanyam"
        assert [n.text for n in details.notes] == ["Called the ward office"]
        assert details.callLogs == []

    async def test_request_details_missing(self, directory_store) -> None:
        assert await directory_store.get_request_details(3) is None

    async def test_request_details_with_unknown_assignee(self, directory_store) -> None:
        await directory_store.create_request(new_request(constituentId=None))
        await directory_store.update_request(1, RequestUpdate(assignedToId=99))

        details = await directory_store.get_request_details(1)

        assert details.constituent is None
        assert details.assignedTo is None

    async def test_appointments_in_schedule_order(self, memory_store, reference_now) -> None:
        later = await memory_store.create_appointment(
            AppointmentCreate(requestId=1, scheduledDate=reference_now + timedelta(days=1), duration=30)
        )
        sooner = await memory_store.create_appointment(
            AppointmentCreate(requestId=1, scheduledDate=reference_now, duration=30)
        )

        assert (later.id, sooner.id) == (1, 2)
        assert await memory_store.list_appointments() == [sooner, later]
        assert await memory_store.list_appointments(reference_now + timedelta(hours=1)) == [later]


class TestUpcomingAppointments:

    @staticmethod
    def build_store(make_record, appointments) -> InMemoryRequestStore:
        return InMemoryRequestStore(
            [make_record(id=1, constituentId=3, subject="Land records meeting")],
            constituents=build_sample_constituents(),
            appointments=appointments,
        )

    async def test_limit(self, make_record, reference_now) -> None:
        store = self.build_store(make_record, [
            Appointment(id=i, requestId=1, scheduledDate=reference_now + timedelta(days=i), duration=30)
            for i in range(1, 8)
        ])

        upcoming = await store.upcoming_appointments(reference_now)

        assert len(upcoming) == UPCOMING_APPOINTMENT_LIMIT
        assert [a.id for a in upcoming] == [1, 2, 3, 4, 5]

    async def test_skips_appointments_without_constituent(self, make_record, reference_now) -> None:
        store = InMemoryRequestStore(
            [make_record(id=1, constituentId=None), make_record(id=2, constituentId=77)],
            constituents=build_sample_constituents(),
            appointments=[
                Appointment(id=1, requestId=1, scheduledDate=reference_now, duration=30),
                Appointment(id=2, requestId=2, scheduledDate=reference_now, duration=30),
            ],
        )

        assert await store.upcoming_appointments(reference_now) == []

    async def test_display_follows_zone_of_now(self, make_record) -> None:
        kolkata = timezone(timedelta(hours=5, minutes=30))
        now = datetime(2026, 10, 14, 23, 0, tzinfo=kolkata)
        store = self.build_store(make_record, [
            Appointment(id=1, requestId=1, scheduledDate=datetime(2026, 10, 14, 18, 30, tzinfo=timezone.utc),
                        duration=30),
        ])

        [row] = await store.upcoming_appointments(now)

        assert (row.date, row.time, row.isToday) == ("Thu, Oct 15", "12:00 AM", False)
        assert row.constituentId == 3
        assert row.constituent.name == "Ramachandra Prasad"

    async def test_naive_schedule_read_in_zone_of_now(self, make_record, reference_now) -> None:
        store = self.build_store(make_record, [
            Appointment(id=1, requestId=1, scheduledDate=datetime(2026, 10, 14, 12, 0), duration=30),
            Appointment(id=2, requestId=1, scheduledDate=datetime(2026, 10, 13, 23, 59), duration=30),
        ])

        upcoming = await store.upcoming_appointments(reference_now)

        assert [(a.id, a.time, a.isToday) for a in upcoming] == [(1, "12:00 PM", True)]


# =============================================================================
# TEST CLASS: SAMPLE DATA
# =============================================================================


class TestSampleData:

    def test_deterministic_for_seed(self, reference_now) -> None:
        assert build_sample_requests(25, reference_now, seed=3) == build_sample_requests(
            25, reference_now, seed=3
        )

    def test_timestamps_within_window(self, reference_now) -> None:
        records = build_sample_requests(60, reference_now)

        assert [r.id for r in records] == list(range(1, 61))
        for record in records:
            assert reference_now - timedelta(days=SAMPLE_WINDOW_DAYS) <= record.createdAt <= reference_now
            assert record.createdAt <= record.updatedAt <= reference_now
            assert record.assignedToId == assignee_for_category(record.category)

    def test_zero_count(self, reference_now) -> None:
        assert build_sample_requests(0, reference_now) == []

    def test_directory_lines_up_with_requests(self, reference_now) -> None:
        constituent_ids = {c.id for c in build_sample_constituents()}
        team = {m.id: m.role for m in build_sample_team_members()}

        for record in build_sample_requests(60, reference_now):
            assert record.constituentId in constituent_ids
            assert record.assignedToId in team
        assert team[DEFAULT_ASSIGNEES[RequestCategory.EMERGENCY]] == "Emergency Coordinator"

    def test_appointments_for_open_appointment_requests(self, reference_now) -> None:
        records = build_sample_requests(80, reference_now)
        today = reference_now.replace(hour=0, minute=0)

        appointments = build_sample_appointments(records, reference_now)

        by_id = {r.id: r for r in records}
        expected = [
            r.id for r in records
            if r.category is RequestCategory.APPOINTMENT and r.status is not RequestStatus.RESOLVED
        ]
        assert [a.requestId for a in appointments] == expected
        assert [a.id for a in appointments] == list(range(1, len(expected) + 1))
        for appointment in appointments:
            assert by_id[appointment.requestId].category is RequestCategory.APPOINTMENT
            assert today <= appointment.scheduledDate < today + timedelta(days=7)


# =============================================================================
# TEST CLASS: POSTGRES STORE
# =============================================================================


def db_row(request_id: int = 5, **overrides) -> dict:
    created = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
    row = {
        "id": request_id,
        "constituent_id": 2,
        "category": "emergency",
        "subject": "Transformer fire",
        "description": "Street without power",
        "status": "new",
        "priority": "high",
        "assigned_to_id": 2,
        "location": None,
        "attachments": None,
        "created_at": created,
        "updated_at": created,
    }
    row.update(overrides)
    return row


class TestPostgresRequestStore:

    @pytest.fixture
    def store(self, step_clock) -> PostgresRequestStore:
        return PostgresRequestStore(clock=step_clock)

    async def test_list_all_maps_rows(self, store) -> None:
        rows = [db_row(1), db_row(2, status="resolved", attachments=["a.png"])]
        with patch("backend.services.request_store.execute_query", AsyncMock(return_value=rows)):
            records = await store.list_all_requests()

        assert [r.id for r in records] == [1, 2]
        assert records[0].category is RequestCategory.EMERGENCY
        assert records[0].attachments == []
        assert records[1].status is RequestStatus.RESOLVED
        assert records[1].attachments == ["a.png"]

    async def test_list_requests_passes_filter_params(self, store) -> None:
        mock = AsyncMock(return_value=[])
        with patch("backend.services.request_store.execute_query", mock):
            await store.list_requests(RequestFilters(category="emergency", searchTerm="fire"))

        sql, *params = mock.call_args.args
        assert "ORDER BY created_at DESC" in sql
        assert params == ["emergency", "%fire%"]

    async def test_count_requests(self, store) -> None:
        with patch("backend.services.request_store.execute_scalar", AsyncMock(return_value=4)):
            assert await store.count_requests(RequestFilters(status="new")) == 4

    async def test_get_request_missing(self, store) -> None:
        with patch("backend.services.request_store.execute_query_one", AsyncMock(return_value=None)):
            assert await store.get_request(9) is None

    async def test_create_request_parameters(self, store, step_clock) -> None:
        mock = AsyncMock(return_value=db_row(11, category="infrastructure", assigned_to_id=3,
                                              priority="medium"))
        with patch("backend.services.request_store.execute_query_one", mock):
            record = await store.create_request(new_request())

        sql, *params = mock.call_args.args
        assert "'new'" in sql
        assert params == [
            3, "infrastructure", "Broken street lights", "Four lights out near the bus stand.",
            "medium", 3, "Main Road", [], step_clock.current,
        ]
        assert record.id == 11

    async def test_update_request_parameters(self, store, step_clock) -> None:
        mock = AsyncMock(return_value=db_row(5, status="resolved", assigned_to_id=None))
        with patch("backend.services.request_store.execute_query_one", mock):
            record = await store.update_request(
                5, RequestUpdate(status=RequestStatus.RESOLVED, assignedToId=None)
            )

        sql, *params = mock.call_args.args
        assert "GREATEST($2, updated_at)" in sql
        assert "status = $3" in sql
        assert "assigned_to_id = $4" in sql
        assert params == [5, step_clock.current, "resolved", None]
        assert record.status is RequestStatus.RESOLVED

    async def test_update_unknown_id_returns_none(self, store) -> None:
        with patch("backend.services.request_store.execute_query_one", AsyncMock(return_value=None)):
            assert await store.update_request(5, RequestUpdate(priority=RequestPriority.LOW)) is None

    async def test_startup_creates_schema_in_dependency_order(self, store) -> None:
        mock = AsyncMock(return_value="CREATE TABLE")
        with patch("backend.services.request_store.execute_command", mock):
            await store.startup()

        executed = [call.args[0] for call in mock.call_args_list]
        assert executed == list(SCHEMA_DDL)
        tables = [sql.split("CREATE TABLE IF NOT EXISTS ")[1].split()[0] for sql in executed]
        assert tables == [
            "constituents", "team_members", "requests", "request_notes", "call_logs", "appointments",
        ]

    async def test_list_constituents_passes_search(self, store) -> None:
        row = {"id": 4, "name": "Lakshmamma Chowdary", "email": "lakshmamma.c@example.com",
               "phone": "+91 65432 10987", "avatar": None, "address": None, "district": "Prathipadu"}
        mock = AsyncMock(return_value=[row])
        with patch("backend.services.request_store.execute_query", mock):
            constituents = await store.list_constituents("prathi")

        sql, *params = mock.call_args.args
        assert "FROM constituents" in sql
        assert params == ["%prathi%"]
        assert constituents[0].name == "Lakshmamma Chowdary"

    async def test_get_team_member_missing(self, store) -> None:
        with patch("backend.services.request_store.execute_query_one", AsyncMock(return_value=None)):
            assert await store.get_team_member(8) is None

    async def test_create_note_parameters(self, store, step_clock) -> None:
        row = {"id": 3, "request_id": 5, "team_member_id": None, "text": "Visited site",
               "created_at": step_clock.current}
        mock = AsyncMock(return_value=row)
        with patch("backend.services.request_store.execute_query_one", mock):
            note = await store.create_request_note(5, RequestNoteCreate(text="Visited site"))

        sql, *params = mock.call_args.args
        assert "INSERT INTO request_notes" in sql
        assert params == [5, None, "Visited site", step_clock.current]
        assert (note.id, note.requestId) == (3, 5)

    async def test_create_call_log_parameters(self, store, step_clock) -> None:
        row = {"id": 1, "request_id": 5, "team_member_id": 2, "outcome": "No answer",
               "notes": "Try evening", "call_time": step_clock.current}
        mock = AsyncMock(return_value=row)
        with patch("backend.services.request_store.execute_query_one", mock):
            log = await store.create_call_log(
                5, CallLogCreate(outcome="No answer", notes="Try evening", teamMemberId=2)
            )

        sql, *params = mock.call_args.args
        assert "INSERT INTO call_logs" in sql
        assert params == [5, 2, "No answer", "Try evening", step_clock.current]
        assert log.callTime == step_clock.current

    async def test_list_appointments_from(self, store, reference_now) -> None:
        row = {"id": 2, "request_id": 5, "scheduled_date": reference_now, "duration": 30,
               "location": None, "is_confirmed": True}
        mock = AsyncMock(return_value=[row])
        with patch("backend.services.request_store.execute_query", mock):
            appointments = await store.list_appointments(reference_now)

        sql, *params = mock.call_args.args
        assert "scheduled_date >= $1" in sql
        assert params == [reference_now]
        assert appointments[0].isConfirmed is True

    async def test_request_details_joins_lookups(self, store) -> None:
        constituent = {"id": 2, "name": "Narasimha Raju", "email": "narasimha.r@example.com",
                       "phone": "+91 87654 32109", "avatar": None, "address": None, "district": None}
        member = {"id": 2, "name": "Ravi Teja", "email": "ravi.teja@gov.in",
                  "role": "Emergency Coordinator", "phone": "+91 87654 10002", "avatar": None}
        lookups = AsyncMock(side_effect=[db_row(5), constituent, member])
        with patch("backend.services.request_store.execute_query_one", lookups):
            with patch("backend.services.request_store.execute_query", AsyncMock(return_value=[])):
                details = await store.get_request_details(5)

        assert details.subject == "Transformer fire"
        assert details.constituent.name == "Narasimha Raju"
        assert details.assignedTo.role == "Emergency Coordinator"
        assert details.notes == [] and details.callLogs == []

    async def test_database_errors_propagate(self, store) -> None:
        with patch("backend.services.request_store.execute_query",
                   AsyncMock(side_effect=ConnectionError("db down"))):
            with pytest.raises(ConnectionError):
                await store.list_all_requests()


# =============================================================================
# TEST CLASS: SQL BUILDERS
# =============================================================================


class TestRequestQueries:

    def test_unfiltered_list_has_no_where(self) -> None:
        sql, params = get_request_list_query()

        assert "WHERE" not in sql
        assert params == []

    def test_filters_are_parameterized_in_order(self) -> None:
        sql, params = get_request_list_query(
            category="appointment", status="new", priority="low", search_term="road"
        )

        assert "category = $1" in sql
        assert "status = $2" in sql
        assert "priority = $3" in sql
        assert "subject ILIKE $4 OR description ILIKE $4" in sql
        assert params == ["appointment", "new", "low", "%road%"]

    def test_count_query_shares_filters(self) -> None:
        sql, params = get_request_count_query(status="resolved")

        assert sql.startswith("SELECT COUNT(*) FROM requests WHERE status = $1")
        assert params == ["resolved"]

    def test_update_rejects_unknown_fields(self, reference_now) -> None:
        with pytest.raises(KeyError):
            get_request_update_query(1, {"createdAt": reference_now}, reference_now)

    def test_update_without_changes_touches_updated_at(self, reference_now) -> None:
        sql, params = get_request_update_query(1, {}, reference_now)

        assert "SET updated_at = GREATEST($2, updated_at)" in sql
        assert params == [1, reference_now]

    def test_search_also_matches_constituent_name(self) -> None:
        sql, params = get_request_count_query(search_term="reddy")

        assert "SELECT id FROM constituents WHERE name ILIKE $1" in sql
        assert params == ["%reddy%"]


class TestDirectoryAndActivityQueries:

    def test_constituent_list_without_search(self) -> None:
        sql, params = get_constituent_list_query()

        assert "WHERE" not in sql
        assert sql.endswith("ORDER BY id")
        assert params == []

    def test_constituent_search_covers_contact_fields(self) -> None:
        sql, params = get_constituent_list_query("guntur")

        for column in ("name", "email", "phone", "district"):
            assert f"{column} ILIKE $1" in sql
        assert params == ["%guntur%"]

    def test_appointment_list_query(self, reference_now) -> None:
        unfiltered, no_params = get_appointment_list_query()
        filtered, params = get_appointment_list_query(reference_now)

        assert "WHERE" not in unfiltered and no_params == []
        assert "WHERE scheduled_date >= $1" in filtered
        assert params == [reference_now]
