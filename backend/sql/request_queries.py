"""
Parameterized SQL for the requests table.

Query builders return (sql, params) tuples with asyncpg-style $n
placeholders so that values are never interpolated into SQL text. Column
names that are interpolated come only from REQUEST_UPDATABLE_COLUMNS.

Table layout:
    requests(id, constituent_id, category, subject, description, status,
             priority, assigned_to_id, location, attachments,
             created_at, updated_at)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


# Columns selected for every read; aliased rows are mapped to RequestRecord
REQUEST_COLUMNS: str = """
    id,
    constituent_id,
    category,
    subject,
    description,
    status,
    priority,
    assigned_to_id,
    location,
    attachments,
    created_at,
    updated_at
"""

# Maps RequestUpdate field names to columns
REQUEST_UPDATABLE_COLUMNS: Dict[str, str] = {
    "status": "status",
    "priority": "priority",
    "assignedToId": "assigned_to_id",
}

REQUESTS_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS requests (
    id              SERIAL PRIMARY KEY,
    constituent_id  INTEGER REFERENCES constituents (id),
    category        TEXT NOT NULL,
    subject         TEXT NOT NULL DEFAULT '',
    description     TEXT NOT NULL DEFAULT '',
    status          TEXT NOT NULL DEFAULT 'new',
    priority        TEXT NOT NULL,
    assigned_to_id  INTEGER REFERENCES team_members (id),
    location        TEXT,
    attachments     TEXT[] NOT NULL DEFAULT '{}',
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    CHECK (updated_at >= created_at)
);

CREATE INDEX IF NOT EXISTS idx_requests_created_at ON requests (created_at);
"""


def _filter_clause(
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search_term: Optional[str] = None,
) -> Tuple[str, List[Any]]:
    """Build a WHERE clause for the request list filters ('' when unfiltered)."""
    conditions: List[str] = []
    params: List[Any] = []

    for column, value in (("category", category), ("status", status), ("priority", priority)):
        if value:
            params.append(value)
            conditions.append(f"{column} = ${len(params)}")

    if search_term:
        params.append(f"%{search_term}%")
        n = len(params)
        conditions.append(
            f"(subject ILIKE ${n} OR description ILIKE ${n} OR constituent_id IN "
            f"(SELECT id FROM constituents WHERE name ILIKE ${n}))"
        )

    if not conditions:
        return "", params
    return "WHERE " + " AND ".join(conditions), params


def get_all_requests_query() -> str:
    """Every request, oldest first."""
    return f"SELECT {REQUEST_COLUMNS} FROM requests ORDER BY created_at, id"


def get_request_list_query(
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search_term: Optional[str] = None,
) -> Tuple[str, List[Any]]:
    """
    Filtered request list, newest first.

    Example:
        >>> sql, params = get_request_list_query(category="emergency", search_term="flood")
        >>> params
        ['emergency', '%flood%']
    """
    where, params = _filter_clause(category, status, priority, search_term)
    sql = f"""
        SELECT {REQUEST_COLUMNS}
        FROM requests
        {where}
        ORDER BY created_at DESC, id DESC
    """
    return sql, params


def get_request_count_query(
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search_term: Optional[str] = None,
) -> Tuple[str, List[Any]]:
    """Count of requests matching the same filters as the list query."""
    where, params = _filter_clause(category, status, priority, search_term)
    return f"SELECT COUNT(*) FROM requests {where}", params


def get_request_by_id_query() -> str:
    return f"SELECT {REQUEST_COLUMNS} FROM requests WHERE id = $1"


def get_request_insert_query() -> str:
    """
    Insert a new request; status is always 'new' and both timestamps are $9.

    Parameters: constituent_id, category, subject, description, priority,
    assigned_to_id, location, attachments, now.
    """
    return f"""
        INSERT INTO requests (
            constituent_id, category, subject, description, status,
            priority, assigned_to_id, location, attachments,
            created_at, updated_at
        )
        VALUES ($1, $2, $3, $4, 'new', $5, $6, $7, $8, $9, $9)
        RETURNING {REQUEST_COLUMNS}
    """


def get_request_update_query(
    request_id: int,
    changes: Dict[str, Any],
    now: datetime,
) -> Tuple[str, List[Any]]:
    """
    Partial update that always advances updated_at.

    updated_at is set to GREATEST(now, updated_at) so a lagging clock can
    never move it backwards.

    Args:
        request_id: Target request id.
        changes: RequestUpdate fields that were explicitly set.
        now: Mutation timestamp.

    Raises:
        KeyError: If changes contains a field that is not updatable.
    """
    params: List[Any] = [request_id, now]
    assignments: List[str] = ["updated_at = GREATEST($2, updated_at)"]

    for field_name, value in changes.items():
        params.append(value)
        assignments.append(f"{REQUEST_UPDATABLE_COLUMNS[field_name]} = ${len(params)}")

    sql = f"""
        UPDATE requests
        SET {", ".join(assignments)}
        WHERE id = $1
        RETURNING {REQUEST_COLUMNS}
    """
    return sql, params
