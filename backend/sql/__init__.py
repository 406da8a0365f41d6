"""
SQL Query Module for the Constituency Desk backend.

Provides parameterized SQL for the tables behind the PostgreSQL store:
- request_queries: requests
- directory_queries: constituents, team_members
- activity_queries: request_notes, call_logs, appointments

Query builders are re-exported here so callers can import from backend.sql
directly.

Example usage:
    from backend.sql import get_request_list_query

    sql, params = get_request_list_query(status="resolved")
    rows = await execute_query(sql, *params)
"""

from backend.sql.request_queries import (
    REQUEST_COLUMNS,
    REQUEST_UPDATABLE_COLUMNS,
    REQUESTS_TABLE_DDL,
    get_all_requests_query,
    get_request_list_query,
    get_request_count_query,
    get_request_by_id_query,
    get_request_insert_query,
    get_request_update_query,
)

from backend.sql.directory_queries import (
    CONSTITUENT_COLUMNS,
    CONSTITUENTS_TABLE_DDL,
    TEAM_MEMBER_COLUMNS,
    TEAM_MEMBERS_TABLE_DDL,
    get_constituent_list_query,
    get_constituent_by_id_query,
    get_constituent_insert_query,
    get_team_member_list_query,
    get_team_member_by_id_query,
    get_team_member_insert_query,
)

from backend.sql.activity_queries import (
    APPOINTMENT_COLUMNS,
    APPOINTMENTS_TABLE_DDL,
    CALL_LOG_COLUMNS,
    CALL_LOGS_TABLE_DDL,
    REQUEST_NOTE_COLUMNS,
    REQUEST_NOTES_TABLE_DDL,
    get_appointment_list_query,
    get_appointment_insert_query,
    get_call_logs_query,
    get_call_log_insert_query,
    get_request_notes_query,
    get_request_note_insert_query,
)


__all__ = [
    # Requests
    "REQUEST_COLUMNS",
    "REQUEST_UPDATABLE_COLUMNS",
    "REQUESTS_TABLE_DDL",
    "get_all_requests_query",
    "get_request_list_query",
    "get_request_count_query",
    "get_request_by_id_query",
    "get_request_insert_query",
    "get_request_update_query",
    # Directory
    "CONSTITUENT_COLUMNS",
    "CONSTITUENTS_TABLE_DDL",
    "TEAM_MEMBER_COLUMNS",
    "TEAM_MEMBERS_TABLE_DDL",
    "get_constituent_list_query",
    "get_constituent_by_id_query",
    "get_constituent_insert_query",
    "get_team_member_list_query",
    "get_team_member_by_id_query",
    "get_team_member_insert_query",
    # Activity
    "APPOINTMENT_COLUMNS",
    "APPOINTMENTS_TABLE_DDL",
    "CALL_LOG_COLUMNS",
    "CALL_LOGS_TABLE_DDL",
    "REQUEST_NOTE_COLUMNS",
    "REQUEST_NOTES_TABLE_DDL",
    "get_appointment_list_query",
    "get_appointment_insert_query",
    "get_call_logs_query",
    "get_call_log_insert_query",
    "get_request_notes_query",
    "get_request_note_insert_query",
]
