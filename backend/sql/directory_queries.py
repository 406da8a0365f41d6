"""
Parameterized SQL for the constituents and team_members tables.

Both tables are small reference data for the request table: constituents
file requests, team members are assigned to them.
"""

from typing import Any, List, Optional, Tuple


CONSTITUENT_COLUMNS: str = "id, name, email, phone, avatar, address, district"

TEAM_MEMBER_COLUMNS: str = "id, name, email, role, phone, avatar"

CONSTITUENTS_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS constituents (
    id        SERIAL PRIMARY KEY,
    name      TEXT NOT NULL,
    email     TEXT NOT NULL,
    phone     TEXT NOT NULL,
    avatar    TEXT,
    address   TEXT,
    district  TEXT
);
"""

TEAM_MEMBERS_TABLE_DDL: str = """
CREATE TABLE IF NOT EXISTS team_members (
    id      SERIAL PRIMARY KEY,
    name    TEXT NOT NULL,
    email   TEXT NOT NULL,
    role    TEXT NOT NULL,
    phone   TEXT NOT NULL,
    avatar  TEXT
);
"""


# =============================================================================
# Constituents
# =============================================================================


def get_constituent_list_query(search_term: Optional[str] = None) -> Tuple[str, List[Any]]:
    """
    Constituents ordered by id, optionally matching search_term against
    name, email, phone or district.

    Example:
        >>> sql, params = get_constituent_list_query("guntur")
        >>> params
        ['%guntur%']
    """
    params: List[Any] = []
    where = ""
    if search_term:
        params.append(f"%{search_term}%")
        where = (
            "WHERE name ILIKE $1 OR email ILIKE $1 OR phone ILIKE $1 "
            "OR district ILIKE $1"
        )

    sql = f"SELECT {CONSTITUENT_COLUMNS} FROM constituents {where} ORDER BY id"
    return sql, params


def get_constituent_by_id_query() -> str:
    return f"SELECT {CONSTITUENT_COLUMNS} FROM constituents WHERE id = $1"


def get_constituent_insert_query() -> str:
    """Parameters: name, email, phone, avatar, address, district."""
    return f"""
        INSERT INTO constituents (name, email, phone, avatar, address, district)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {CONSTITUENT_COLUMNS}
    """


# =============================================================================
# Team Members
# =============================================================================


def get_team_member_list_query() -> str:
    return f"SELECT {TEAM_MEMBER_COLUMNS} FROM team_members ORDER BY id"


def get_team_member_by_id_query() -> str:
    return f"SELECT {TEAM_MEMBER_COLUMNS} FROM team_members WHERE id = $1"


def get_team_member_insert_query() -> str:
    """Parameters: name, email, role, phone, avatar."""
    return f"""
        INSERT INTO team_members (name, email, role, phone, avatar)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {TEAM_MEMBER_COLUMNS}
    """
