"""
Constituency Desk Backend Package.

FastAPI service for a constituency office: constituents file requests,
staff triage and resolve them, and the minister's office views statistics.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Reporting engine and request store
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
