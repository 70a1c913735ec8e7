from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "semesters": {"id", "term", "academic_year"},
    "courses": {"id", "prefix", "number", "title"},
    "course_instances": {"id", "course_id", "semester_id", "offered"},
    "non_class_parents": {"id", "title"},
    "non_class_events": {"id", "non_class_parent_id", "semester_id"},
    "buildings": {"id", "name", "campus"},
    "rooms": {"id", "building_id", "name"},
    "meetings": {
        "id",
        "course_instance_id",
        "non_class_event_id",
        "day",
        "start_time",
        "end_time",
        "room_id",
    },
}


def find_schema_gaps(connection: Connection) -> tuple[list[str], dict[str, list[str]]]:
    """Compare the live database with the tables and columns the scheduler reads.

    Returns the missing tables and, per existing table, its missing columns.
    """
    inspector = inspect(connection)
    table_names = set(inspector.get_table_names())
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    for table_name, columns in REQUIRED_COLUMNS.items():
        if table_name not in table_names:
            missing_tables.append(table_name)
            continue
        existing = {item["name"] for item in inspector.get_columns(table_name)}
        missing = sorted(columns - existing)
        if missing:
            missing_columns[table_name] = missing
    if missing_tables or missing_columns:
        logger.warning(
            "Database schema is behind; missing tables %s, missing columns %s. Run `alembic upgrade head`.",
            missing_tables,
            missing_columns,
        )
    return missing_tables, missing_columns
