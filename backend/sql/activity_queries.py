"""
Parameterized SQL for request activity: notes, call logs and appointments.

Every activity row belongs to one request (request_id). Notes and call logs
are read newest first; appointments are read in schedule order.
"""

from datetime import datetime
from typing import Any, List, Optional, Tuple


REQUEST_NOTE_COLUMNS: str = "id, request_id, team_member_id, text, created_at"

CALL_LOG_COLUMNS: str = "id, request_id, team_member_id, outcome, notes, call_time"

APPOINTMENT_COLUMNS: str = "id, request_id, scheduled_date, duration, location, is_confirmed"

REQUEST_NOTES_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS request_notes (
    id              SERIAL PRIMARY KEY,
    request_id      INTEGER NOT NULL REFERENCES requests (id),
    team_member_id  INTEGER REFERENCES team_members (id),
    text            TEXT NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_request_notes_request_id ON request_notes (request_id);
"""

CALL_LOGS_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS call_logs (
    id              SERIAL PRIMARY KEY,
    request_id      INTEGER NOT NULL REFERENCES requests (id),
    team_member_id  INTEGER REFERENCES team_members (id),
    outcome         TEXT NOT NULL,
    notes           TEXT,
    call_time       TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_call_logs_request_id ON call_logs (request_id);
"""

APPOINTMENTS_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS appointments (
    id              SERIAL PRIMARY KEY,
    request_id      INTEGER NOT NULL REFERENCES requests (id),
    scheduled_date  TIMESTAMPTZ NOT NULL,
    duration        INTEGER NOT NULL CHECK (duration > 0),
    location        TEXT,
    is_confirmed    BOOLEAN NOT NULL DEFAULT FALSE
);

CREATE INDEX IF NOT EXISTS idx_appointments_scheduled_date ON appointments (scheduled_date);
"""


# =============================================================================
# Notes
# =============================================================================


def get_request_notes_query() -> str:
    """Notes for request $1, newest first."""
    return f"""
        SELECT {REQUEST_NOTE_COLUMNS}
        FROM request_notes
        WHERE request_id = $1
        ORDER BY created_at DESC, id DESC
    """


def get_request_note_insert_query() -> str:
    """Parameters: request_id, team_member_id, text, created_at."""
    return f"""
        INSERT INTO request_notes (request_id, team_member_id, text, created_at)
        VALUES ($1, $2, $3, $4)
        RETURNING {REQUEST_NOTE_COLUMNS}
    """


# =============================================================================
# Call Logs
# =============================================================================


def get_call_logs_query() -> str:
    """Call logs for request $1, most recent call first."""
    return f"""
        SELECT {CALL_LOG_COLUMNS}
        FROM call_logs
        WHERE request_id = $1
        ORDER BY call_time DESC, id DESC
    """


def get_call_log_insert_query() -> str:
    """Parameters: request_id, team_member_id, outcome, notes, call_time."""
    return f"""
        INSERT INTO call_logs (request_id, team_member_id, outcome, notes, call_time)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {CALL_LOG_COLUMNS}
    """


# =============================================================================
# Appointments
# =============================================================================


def get_appointment_list_query(scheduled_from: Optional[datetime] = None) -> Tuple[str, List[Any]]:
    """Appointments in schedule order, optionally from scheduled_from onwards."""
    params: List[Any] = []
    where = ""
    if scheduled_from is not None:
        params.append(scheduled_from)
        where = "WHERE scheduled_date >= $1"

    sql = f"""
        SELECT {APPOINTMENT_COLUMNS}
        FROM appointments
        {where}
        ORDER BY scheduled_date, id
    """
    return sql, params


def get_appointment_insert_query() -> str:
    """Parameters: request_id, scheduled_date, duration, location, is_confirmed."""
    return f"""
        INSERT INTO appointments (request_id, scheduled_date, duration, location, is_confirmed)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {APPOINTMENT_COLUMNS}
    """
