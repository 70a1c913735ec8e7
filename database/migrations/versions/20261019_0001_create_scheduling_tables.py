"""create scheduling tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    term = sa.Enum("FALL", "SPRING", name="term")
    offered_status = sa.Enum("yes", "no", "blank", "retired", name="offered_status")
    weekday = sa.Enum("MON", "TUE", "WED", "THU", "FRI", name="weekday")

    op.create_table(
        "semesters",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("term", term, nullable=False),
        sa.Column("academic_year", sa.Integer(), nullable=False),
        sa.UniqueConstraint("term", "academic_year", name="uq_semesters_term_year"),
    )
    op.create_index("ix_semesters_academic_year", "semesters", ["academic_year"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("prefix", sa.String(length=20), nullable=False),
        sa.Column("number", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("prefix", "number", name="uq_courses_prefix_number"),
    )
    op.create_index("ix_courses_prefix", "courses", ["prefix"])

    op.create_table(
        "course_instances",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("semester_id", sa.String(length=36), nullable=False),
        sa.Column("offered", offered_status, nullable=False, server_default="blank"),
        sa.UniqueConstraint("course_id", "semester_id", name="uq_course_instances_course_semester"),
    )
    op.create_index("ix_course_instances_course_id", "course_instances", ["course_id"])
    op.create_index("ix_course_instances_semester_id", "course_instances", ["semester_id"])

    op.create_table(
        "non_class_parents",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
    )

    op.create_table(
        "non_class_events",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("non_class_parent_id", sa.String(length=36), nullable=False),
        sa.Column("semester_id", sa.String(length=36), nullable=False),
    )
    op.create_index("ix_non_class_events_non_class_parent_id", "non_class_events", ["non_class_parent_id"])
    op.create_index("ix_non_class_events_semester_id", "non_class_events", ["semester_id"])

    op.create_table(
        "buildings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False, unique=True),
        sa.Column("campus", sa.String(length=100), nullable=False),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("building_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.UniqueConstraint("building_id", "name", name="uq_rooms_building_name"),
    )
    op.create_index("ix_rooms_building_id", "rooms", ["building_id"])

    op.create_table(
        "meetings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_instance_id", sa.String(length=36), nullable=True),
        sa.Column("non_class_event_id", sa.String(length=36), nullable=True),
        sa.Column("day", weekday, nullable=False),
        sa.Column("start_time", sa.Time(timezone=False), nullable=False),
        sa.Column("end_time", sa.Time(timezone=False), nullable=False),
        sa.Column("room_id", sa.String(length=36), nullable=True),
        sa.CheckConstraint(
            "(course_instance_id IS NULL) <> (non_class_event_id IS NULL)",
            name="ck_meetings_single_parent",
        ),
        sa.CheckConstraint("start_time < end_time", name="ck_meetings_time_order"),
    )
    op.create_index("ix_meetings_course_instance_id", "meetings", ["course_instance_id"])
    op.create_index("ix_meetings_non_class_event_id", "meetings", ["non_class_event_id"])
    op.create_index("ix_meetings_room_day", "meetings", ["room_id", "day"])


def downgrade() -> None:
    op.drop_index("ix_meetings_room_day", table_name="meetings")
    op.drop_index("ix_meetings_non_class_event_id", table_name="meetings")
    op.drop_index("ix_meetings_course_instance_id", table_name="meetings")
    op.drop_table("meetings")
    op.drop_index("ix_rooms_building_id", table_name="rooms")
    op.drop_table("rooms")
    op.drop_table("buildings")
    op.drop_index("ix_non_class_events_semester_id", table_name="non_class_events")
    op.drop_index("ix_non_class_events_non_class_parent_id", table_name="non_class_events")
    op.drop_table("non_class_events")
    op.drop_table("non_class_parents")
    op.drop_index("ix_course_instances_semester_id", table_name="course_instances")
    op.drop_index("ix_course_instances_course_id", table_name="course_instances")
    op.drop_table("course_instances")
    op.drop_index("ix_courses_prefix", table_name="courses")
    op.drop_table("courses")
    op.drop_index("ix_semesters_academic_year", table_name="semesters")
    op.drop_table("semesters")
    sa.Enum(name="weekday").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="offered_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="term").drop(op.get_bind(), checkfirst=True)
